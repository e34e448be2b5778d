import pulumi
import pulumi_aws as aws
from types import MappingProxyType
from typing import Mapping

CANONICAL_OWNER_ID = "099720109477"

DEFAULT_UBUNTU_VERSION = "22.04"

# {arch} is filled in at lookup time
UBUNTU_AMI_NAME_PATTERNS: Mapping[str, str] = MappingProxyType({
    "20.04": "ubuntu/images/hvm-ssd/ubuntu-focal-20.04-{arch}-server-*",
    "22.04": "ubuntu/images/hvm-ssd/ubuntu-jammy-22.04-{arch}-server-*",
    "24.04": "ubuntu/images/hvm-ssd/ubuntu-noble-24.04-{arch}-server-*",
})


def get_ubuntu_ami_name_pattern(version: str, architecture: str = "amd64") -> str:
    """
    Map an Ubuntu release to the AMI name glob Canonical publishes it under.

    Unknown versions fall back to DEFAULT_UBUNTU_VERSION instead of failing.

    Args:
        version: Ubuntu version (e.g., "24.04")
        architecture: CPU architecture (amd64, arm64)

    Returns:
        str: AMI name pattern
    """
    pattern = UBUNTU_AMI_NAME_PATTERNS.get(version, UBUNTU_AMI_NAME_PATTERNS[DEFAULT_UBUNTU_VERSION])
    return pattern.format(arch=architecture)


def get_ubuntu_ami(
    version: str = DEFAULT_UBUNTU_VERSION,
    architecture: str = "amd64",
    virtualization_type: str = "hvm",
) -> pulumi.Output[str]:
    """
    Get the latest Ubuntu AMI ID.

    Args:
        version: Ubuntu version (e.g., "22.04")
        architecture: CPU architecture (amd64, arm64)
        virtualization_type: Virtualization type (hvm, paravirtual)

    Returns:
        pulumi.Output[str]: AMI ID
    """
    if version not in UBUNTU_AMI_NAME_PATTERNS:
        pulumi.log.warn(
            f"Unsupported ubuntuVersion '{version}', falling back to {DEFAULT_UBUNTU_VERSION}"
        )
    name_pattern = get_ubuntu_ami_name_pattern(version, architecture)
    pulumi.log.info(f"Looking up most recent AMI matching {name_pattern}")
    ami = aws.ec2.get_ami_output(
        most_recent=True,
        owners=[CANONICAL_OWNER_ID],
        filters=[
            {
                "name": "name",
                "values": [name_pattern]
            },
            {
                "name": "virtualization-type",
                "values": [virtualization_type]
            }
        ],
    )
    return ami.id
