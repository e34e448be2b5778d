import pulumi
import pulumi_aws as aws
from typing import List, Optional, Dict

from ..utils.ami import get_ubuntu_ami


def load_user_data(path: str) -> str:
    """
    Read a cloud-init (or shell) bootstrap file to pass as instance user data.

    The content is returned unmodified. Bytes that are not valid UTF-8 are
    replaced with U+FFFD rather than rejected. A missing or unreadable file
    raises OSError; there is no fallback.

    Args:
        path: Path to the bootstrap file

    Returns:
        str: The file content
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def build_instance_tags(project_name: str, tags: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Merge tags with the derived Name tag; Name always wins."""
    return {**(tags or {}), "Name": f"{project_name}-server"}


def create_instance(
    name: str,
    instance_type: str,
    security_group_ids: List[pulumi.Input[str]],
    subnet_id: Optional[pulumi.Input[str]] = None,
    ami_id: Optional[pulumi.Input[str]] = None,
    key_name: Optional[pulumi.Input[str]] = None,
    user_data: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
    associate_public_ip_address: bool = True,
    root_volume_size: int = 20,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.Instance:
    """
    Create an EC2 instance with the specified configuration.

    Args:
        name: Name of the instance
        instance_type: EC2 instance type (e.g., t3.micro)
        security_group_ids: List of security group IDs to attach
        subnet_id: Optional subnet ID to launch in
        ami_id: Optional AMI ID (defaults to latest Ubuntu 22.04)
        key_name: Optional key pair name for SSH access
        user_data: Optional user data script
        tags: Optional dictionary of tags
        associate_public_ip_address: Whether to assign a public IP
        root_volume_size: Root volume size in GiB
        opts: Optional resource options

    Returns:
        aws.ec2.Instance: The created EC2 instance
    """
    if not ami_id:
        ami_id = get_ubuntu_ami()

    return aws.ec2.Instance(
        name,
        instance_type=instance_type,
        ami=ami_id,
        vpc_security_group_ids=security_group_ids,
        subnet_id=subnet_id,
        key_name=key_name,
        user_data=user_data,
        associate_public_ip_address=associate_public_ip_address,
        root_block_device=aws.ec2.InstanceRootBlockDeviceArgs(
            volume_size=root_volume_size,
            volume_type="gp3",
            delete_on_termination=True,
        ),
        tags=tags,
        opts=opts,
    )


def get_instance_public_ip(instance: aws.ec2.Instance) -> pulumi.Output[str]:
    return instance.public_ip


def get_instance_private_ip(instance: aws.ec2.Instance) -> pulumi.Output[str]:
    return instance.private_ip


def get_instance_public_dns(instance: aws.ec2.Instance) -> pulumi.Output[str]:
    return instance.public_dns
