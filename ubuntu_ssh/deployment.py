"""
Deployment composition.

Wires the building blocks together in dependency order:
1. Validate configuration and read the bootstrap file (nothing registered yet)
2. Network (VPC, subnets, optional NAT)
3. Key pair and security group (independent of each other)
4. EC2 instance, which consumes both
5. Stack outputs
"""

from typing import Any, Dict

import pulumi

from .config import DeploymentConfig
from .ec2.instances import (
    create_instance,
    load_user_data,
    build_instance_tags,
    get_instance_public_ip,
    get_instance_private_ip,
    get_instance_public_dns,
)
from .ec2.keypairs import select_keypair, create_keypair, get_keypair, ExistingKeyPair
from .ec2.security_groups import (
    ANYWHERE_CIDR,
    build_ingress_rules,
    create_security_group,
    default_egress_rules,
)
from .networking.vpc import create_network
from .utils.ami import get_ubuntu_ami
from .utils.tags import get_default_tags, merge_tags


def format_ssh_command(host: str, ssh_port: int = 22, private_key_path: str = "~/.ssh/id_ed25519") -> str:
    """Build the ssh invocation for the default ubuntu user."""
    port_flag = f" -p {ssh_port}" if ssh_port != 22 else ""
    return f"ssh -i {private_key_path}{port_flag} ubuntu@{host}"


def format_summary(
    project_name: str,
    environment: str,
    instance_type: str,
    ubuntu_version: str,
    instance_id: str,
    public_ip: str,
    private_ip: str,
    key_name: str,
    ssh_command: str,
) -> str:
    lines = [
        f"Project:        {project_name} ({environment})",
        f"Instance:       {instance_id} ({instance_type}, Ubuntu {ubuntu_version})",
        f"Public IP:      {public_ip or 'none'}",
        f"Private IP:     {private_ip}",
        f"Key pair:       {key_name}",
        f"Connect with:   {ssh_command}",
    ]
    return "\n".join(lines)


def deploy(config: DeploymentConfig) -> Dict[str, Any]:
    """
    Build the whole stack from a loaded configuration.

    All configuration errors (key pair mode, port list, tags) and an unreadable
    cloud-init file are raised before any resource is registered.

    Args:
        config: Loaded deployment configuration

    Returns:
        Dict[str, Any]: Stack outputs keyed by export name
    """
    name = config.project_name

    keypair_selection = select_keypair(
        config.create_key_pair,
        config.public_key_material,
        config.existing_key_pair_name,
    )
    ingress_rules = build_ingress_rules(
        config.ssh_port,
        config.allowed_cidr_blocks,
        config.additional_ports,
    )
    user_data = load_user_data(config.cloud_init_file)
    tags = merge_tags(get_default_tags(name, config.environment), config.tags)

    if config.allowed_cidr_blocks == ANYWHERE_CIDR:
        pulumi.log.warn(f"SSH on port {config.ssh_port} is open to {ANYWHERE_CIDR}; "
                        "set allowedCidrBlocks to restrict it")
    else:
        pulumi.log.info(f"Allowing ingress from {config.allowed_cidr_blocks}")

    network = create_network(
        name=name,
        vpc_cidr=config.vpc_cidr,
        availability_zones=config.availability_zones,
        enable_nat_gateway=config.enable_nat_gateway,
        tags=tags,
    )
    public_subnet_id = network.public_subnet_ids[0]

    key_name = create_keypair(f"{name}-key", keypair_selection, tags=tags)
    if isinstance(keypair_selection, ExistingKeyPair) and config.verify_existing_key_pair:
        key_name = get_keypair(keypair_selection.name)

    security_group = create_security_group(
        name=f"{name}-sg",
        vpc_id=network.vpc.id,
        description=f"Security group for {name}",
        ingress_rules=ingress_rules,
        egress_rules=default_egress_rules(),
        tags=tags,
    )

    instance = create_instance(
        name=f"{name}-server",
        instance_type=config.instance_type,
        security_group_ids=[security_group.id],
        subnet_id=public_subnet_id,
        ami_id=get_ubuntu_ami(config.ubuntu_version),
        key_name=key_name,
        user_data=user_data,
        tags=build_instance_tags(name, tags),
        associate_public_ip_address=config.enable_public_ip,
        root_volume_size=config.root_volume_size,
    )

    public_ip = get_instance_public_ip(instance)
    private_ip = get_instance_private_ip(instance)
    ssh_host = public_ip if config.enable_public_ip else private_ip
    ssh_command = ssh_host.apply(
        lambda host: format_ssh_command(host, config.ssh_port, config.ssh_private_key_path)
    )

    summary = pulumi.Output.all(instance.id, public_ip, private_ip, key_name, ssh_command).apply(
        lambda args: format_summary(
            project_name=name,
            environment=config.environment,
            instance_type=config.instance_type,
            ubuntu_version=config.ubuntu_version,
            instance_id=args[0],
            public_ip=args[1],
            private_ip=args[2],
            key_name=args[3],
            ssh_command=args[4],
        )
    )

    return {
        "instanceId": instance.id,
        "publicIp": public_ip,
        "privateIp": private_ip,
        "publicDns": get_instance_public_dns(instance),
        "securityGroupId": security_group.id,
        "vpcId": network.vpc.id,
        "publicSubnetId": public_subnet_id,
        "keyPairName": key_name,
        "sshCommand": ssh_command,
        "summary": summary,
    }


def export_outputs(outputs: Dict[str, Any]) -> None:
    for key, value in outputs.items():
        pulumi.export(key, value)
