import logging
from enum import Enum

import yaml
from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)


class CheckType(str, Enum):
    CODE_QUALITY = "code-quality"
    BUGS = "bugs"
    PERFORMANCE = "performance"
    SECURITY = "security"
    BEST_PRACTICES = "best-practices"
    ERROR_HANDLING = "error-handling"


CHECK_DESCRIPTIONS = {
    CheckType.CODE_QUALITY: "Code quality issues",
    CheckType.BUGS: "Potential bugs",
    CheckType.PERFORMANCE: "Performance problems",
    CheckType.SECURITY: "Security vulnerabilities",
    CheckType.BEST_PRACTICES: "Best practices violations",
    CheckType.ERROR_HANDLING: "Missing error handling",
}


class RepoConfig(BaseModel):
    language: str = "en"
    checks: list[CheckType] = Field(default_factory=lambda: list(CheckType))
    exclude: list[str] = Field(
        default_factory=lambda: [
            "*.lock",
            "*.min.js",
            "*.min.css",
            "*.generated.*",
            "package-lock.json",
            "yarn.lock",
            "pnpm-lock.yaml",
        ]
    )
    max_lines_per_file: int = Field(default=400, gt=0)

    @classmethod
    def from_yaml(cls, yaml_content: str | None) -> "RepoConfig":
        """Load .ai-review.yaml content or fall back to defaults."""
        if not yaml_content or not yaml_content.strip():
            return cls()

        try:
            data = yaml.safe_load(yaml_content) or {}
            return cls(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning(f"Invalid .ai-review.yaml: {e}")
            return cls()
