"""
Stack configuration loader.

Reads the Pulumi stack config (Pulumi.<stack>.yaml) into an immutable
DeploymentConfig, applying defaults for every value that is not set.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import pulumi

from .exceptions import ConfigurationError
from .utils.ami import DEFAULT_UBUNTU_VERSION
from .utils.ip import get_local_public_ip, format_cidr_from_ip


@dataclass(frozen=True)
class DeploymentConfig:
    """
    Everything the program needs to know to build the stack.

    Attributes:
        project_name: Prefix for resource names and the Project tag
        environment: Deployment environment (dev, staging, prod)
        instance_type: EC2 instance type
        allowed_cidr_blocks: CIDR allowed to reach SSH and the additional ports
        ssh_port: Port sshd listens on
        create_key_pair: Create a key pair from public_key_material
        public_key_material: OpenSSH public key used when create_key_pair is set
        existing_key_pair_name: Key pair already present in the account
        verify_existing_key_pair: Look the existing key pair up before launching
        ubuntu_version: Ubuntu release (20.04, 22.04, 24.04)
        enable_public_ip: Associate a public IP with the instance
        cloud_init_file: Path of the cloud-init file used as user data
        additional_ports: Comma-separated extra TCP ports to open
        availability_zones: Number of availability zones the VPC spans
        enable_nat_gateway: Add private subnets behind a NAT gateway
        vpc_cidr: CIDR block of the VPC
        root_volume_size: Root volume size in GiB
        ssh_private_key_path: Private key path shown in the SSH command output
        tags: Extra tags applied to every resource
    """
    project_name: str = "ubuntu-ssh"
    environment: str = "dev"
    instance_type: str = "t3.micro"
    allowed_cidr_blocks: str = "0.0.0.0/0"
    ssh_port: int = 22
    create_key_pair: bool = False
    public_key_material: Optional[str] = None
    existing_key_pair_name: Optional[str] = None
    verify_existing_key_pair: bool = False
    ubuntu_version: str = DEFAULT_UBUNTU_VERSION
    enable_public_ip: bool = True
    cloud_init_file: str = "cloud-init.yaml"
    additional_ports: Optional[str] = None
    availability_zones: int = 1
    enable_nat_gateway: bool = False
    vpc_cidr: str = "10.0.0.0/16"
    root_volume_size: int = 20
    ssh_private_key_path: str = "~/.ssh/id_ed25519"
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not 1 <= self.ssh_port <= 65535:
            raise ConfigurationError(f"sshPort {self.ssh_port} is outside 1-65535")
        if self.availability_zones < 1:
            raise ConfigurationError(
                f"availabilityZones must be at least 1, got {self.availability_zones}"
            )
        if self.root_volume_size < 8:
            raise ConfigurationError(
                f"rootVolumeSize must be at least 8 GiB, got {self.root_volume_size}"
            )


def _get(config: pulumi.Config, key: str, default):
    value = config.get(key)
    return default if value is None else value


def _get_int(config: pulumi.Config, key: str, default: int) -> int:
    value = config.get_int(key)
    return default if value is None else value


def _get_bool(config: pulumi.Config, key: str, default: bool) -> bool:
    value = config.get_bool(key)
    return default if value is None else value


def load_config(config: Optional[pulumi.Config] = None) -> DeploymentConfig:
    """
    Load deployment configuration from Pulumi stack config.

    Args:
        config: Config to read from (defaults to the project namespace)

    Returns:
        DeploymentConfig: Validated configuration object

    Raises:
        pulumi.config.ConfigTypeError: If a value has the wrong type
        ConfigurationError: If values are semantically invalid
    """
    if config is None:
        config = pulumi.Config()
    defaults = DeploymentConfig()

    allowed_cidr_blocks = _get(config, "allowedCidrBlocks", defaults.allowed_cidr_blocks)
    if config.get_bool("restrictSshToLocalIp"):
        local_ip = get_local_public_ip()
        if not local_ip:
            raise ConfigurationError(
                "restrictSshToLocalIp is set but the local public IP could not be determined",
                context="set allowedCidrBlocks explicitly instead",
            )
        allowed_cidr_blocks = format_cidr_from_ip(local_ip)

    tags = config.get_object("tags") or {}
    if not isinstance(tags, dict):
        raise ConfigurationError("tags must be a map of strings")

    return DeploymentConfig(
        project_name=_get(config, "projectName", defaults.project_name),
        environment=_get(config, "environment", defaults.environment),
        instance_type=_get(config, "instanceType", defaults.instance_type),
        allowed_cidr_blocks=allowed_cidr_blocks,
        ssh_port=_get_int(config, "sshPort", defaults.ssh_port),
        create_key_pair=_get_bool(config, "createKeyPair", defaults.create_key_pair),
        public_key_material=config.get("publicKeyMaterial"),
        existing_key_pair_name=config.get("existingKeyPairName"),
        verify_existing_key_pair=_get_bool(config, "verifyExistingKeyPair", defaults.verify_existing_key_pair),
        ubuntu_version=_get(config, "ubuntuVersion", defaults.ubuntu_version),
        enable_public_ip=_get_bool(config, "enablePublicIp", defaults.enable_public_ip),
        cloud_init_file=_get(config, "cloudInitFile", defaults.cloud_init_file),
        additional_ports=config.get("additionalPorts"),
        availability_zones=_get_int(config, "availabilityZones", defaults.availability_zones),
        enable_nat_gateway=_get_bool(config, "enableNatGateway", defaults.enable_nat_gateway),
        vpc_cidr=_get(config, "vpcCidr", defaults.vpc_cidr),
        root_volume_size=_get_int(config, "rootVolumeSize", defaults.root_volume_size),
        ssh_private_key_path=_get(config, "sshPrivateKeyPath", defaults.ssh_private_key_path),
        tags={str(k): str(v) for k, v in tags.items()},
    )
