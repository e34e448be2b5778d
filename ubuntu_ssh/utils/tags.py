from typing import Dict, Mapping, Optional

from ..exceptions import ConfigurationError

# EC2 tag limits
MAX_TAG_KEY_LENGTH = 128
MAX_TAG_VALUE_LENGTH = 256
RESERVED_TAG_PREFIX = "aws:"


def get_default_tags(project: str, environment: str = "dev") -> Dict[str, str]:
    """
    Tags every resource of the stack carries.

    Args:
        project: Project name, also the resource name prefix
        environment: Deployment environment (dev, staging, prod)

    Returns:
        Dict[str, str]: Project, Environment and ManagedBy tags
    """
    return {
        "Project": project,
        "Environment": environment,
        "ManagedBy": "Pulumi",
    }


def _check_tag(key: str, value: str) -> None:
    if not key:
        raise ConfigurationError("Tag keys must not be empty")
    if key.lower().startswith(RESERVED_TAG_PREFIX):
        raise ConfigurationError(
            f"Tag key '{key}' uses the reserved '{RESERVED_TAG_PREFIX}' prefix"
        )
    if len(key) > MAX_TAG_KEY_LENGTH:
        raise ConfigurationError(f"Tag key '{key[:32]}...' is longer than {MAX_TAG_KEY_LENGTH} characters")
    if len(value) > MAX_TAG_VALUE_LENGTH:
        raise ConfigurationError(f"Value of tag '{key}' is longer than {MAX_TAG_VALUE_LENGTH} characters")


def merge_tags(default_tags: Mapping[str, str], custom_tags: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Overlay user tags from stack config on the defaults.

    User values win on conflicts. The result is always a new dict.

    Raises:
        ConfigurationError: If a user tag would be rejected by EC2
    """
    merged = dict(default_tags)
    for key, value in (custom_tags or {}).items():
        _check_tag(key, value)
        merged[key] = value
    return merged
