"""
Utility functions for infrastructure management.
"""

from .tags import get_default_tags, merge_tags
from .ami import (
    get_ubuntu_ami,
    get_ubuntu_ami_name_pattern,
    UBUNTU_AMI_NAME_PATTERNS,
    DEFAULT_UBUNTU_VERSION,
)
from .ip import get_local_public_ip, format_cidr_from_ip

__all__ = [
    'get_default_tags',
    'merge_tags',
    'get_ubuntu_ami',
    'get_ubuntu_ami_name_pattern',
    'UBUNTU_AMI_NAME_PATTERNS',
    'DEFAULT_UBUNTU_VERSION',
    'get_local_public_ip',
    'format_cidr_from_ip',
]
