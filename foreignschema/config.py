"""Application configuration."""
import os
from dataclasses import dataclass

DEFAULT_REF_PREFIX = "#/components/schemas/"


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SchemaConfig:
    """Schema generation settings."""

    ref_prefix: str = DEFAULT_REF_PREFIX
    qualified_names: bool = False
    log_level: str = "WARNING"
    output_dir: str = "./output"

    @classmethod
    def from_env(cls) -> "SchemaConfig":
        """Load config from environment variables."""
        return cls(
            ref_prefix=os.getenv("FOREIGNSCHEMA_REF_PREFIX", DEFAULT_REF_PREFIX),
            qualified_names=_env_flag("FOREIGNSCHEMA_QUALIFIED_NAMES"),
            log_level=os.getenv("FOREIGNSCHEMA_LOG_LEVEL", "WARNING").upper(),
            output_dir=os.getenv("FOREIGNSCHEMA_OUTPUT_DIR", "./output"),
        )


# Global instance
app_config = SchemaConfig.from_env()
