import pulumi
import pulumi_aws as aws
from dataclasses import dataclass
from typing import List, Dict, Optional, Union, Any, Tuple

from ..exceptions import ConfigurationError

ANYWHERE_CIDR = "0.0.0.0/0"


@dataclass(frozen=True)
class IngressRule:
    protocol: str
    from_port: int
    to_port: int
    cidr_blocks: Tuple[str, ...] = ()
    description: Optional[str] = None


def _parse_port(token: str, field: str) -> int:
    # int() alone would also take "8_080", "+80" and non-ASCII digits
    if not (token.isascii() and token.isdigit()):
        raise ConfigurationError(
            f"Invalid port '{token}' in {field}",
            context="ports must be comma-separated integers, e.g. \"80,443\"",
        )
    port = int(token)
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"Port {port} in {field} is outside 1-65535")
    return port


def parse_ports(additional_ports: Optional[str], field: str = "additionalPorts") -> List[int]:
    """
    Parse a comma-separated port list such as "80, 443".

    Args:
        additional_ports: Comma-separated integers, or None
        field: Configuration key reported in errors

    Returns:
        List[int]: Ports in the order they were listed

    Raises:
        ConfigurationError: If any token is empty, non-numeric or out of range
    """
    if additional_ports is None or not additional_ports.strip():
        return []
    return [_parse_port(token.strip(), field) for token in additional_ports.split(",")]


def build_ingress_rules(
    ssh_port: int,
    allowed_cidr: str,
    additional_ports: Optional[str] = None,
) -> List[IngressRule]:
    """
    Build the ingress rules for the server: SSH first, then any extra ports.

    Args:
        ssh_port: Port sshd listens on
        allowed_cidr: CIDR block allowed to connect
        additional_ports: Optional comma-separated list of extra TCP ports

    Returns:
        List[IngressRule]: SSH rule followed by one rule per additional port
    """
    rules = [
        IngressRule(
            protocol="tcp",
            from_port=ssh_port,
            to_port=ssh_port,
            cidr_blocks=(allowed_cidr,),
            description="SSH",
        )
    ]
    for port in parse_ports(additional_ports):
        rules.append(
            IngressRule(
                protocol="tcp",
                from_port=port,
                to_port=port,
                cidr_blocks=(allowed_cidr,),
                description=f"Port {port}",
            )
        )

    return rules


def default_egress_rules() -> List[Dict[str, Any]]:
    """Allow all outbound traffic."""
    return [{
        "protocol": "-1",
        "from_port": 0,
        "to_port": 0,
        "cidr_blocks": [ANYWHERE_CIDR],
        "description": "All outbound",
    }]


def _ingress_args(rule: Union[Dict[str, Any], IngressRule]) -> aws.ec2.SecurityGroupIngressArgs:
    if isinstance(rule, IngressRule):
        return aws.ec2.SecurityGroupIngressArgs(
            protocol=rule.protocol,
            from_port=rule.from_port,
            to_port=rule.to_port,
            cidr_blocks=list(rule.cidr_blocks),
            description=rule.description,
        )
    return aws.ec2.SecurityGroupIngressArgs(
        protocol=rule["protocol"],
        from_port=rule["from_port"],
        to_port=rule["to_port"],
        cidr_blocks=rule.get("cidr_blocks", []),
        description=rule.get("description"),
    )


def create_security_group(
    name: str,
    vpc_id: pulumi.Input[str],
    description: str,
    ingress_rules: List[Union[Dict[str, Any], IngressRule]],
    egress_rules: Optional[List[Dict[str, Any]]] = None,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.SecurityGroup:
    """
    Create a security group with the specified rules.

    Args:
        name: Name of the security group
        vpc_id: ID of the VPC
        description: Description of the security group
        ingress_rules: List of ingress rules
        egress_rules: Optional list of egress rules (default: allow all outbound)
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.SecurityGroup: The created security group
    """
    if egress_rules is None:
        egress_rules = default_egress_rules()

    return aws.ec2.SecurityGroup(
        name,
        vpc_id=vpc_id,
        description=description,
        ingress=[_ingress_args(rule) for rule in ingress_rules],
        egress=[
            aws.ec2.SecurityGroupEgressArgs(
                protocol=rule["protocol"],
                from_port=rule["from_port"],
                to_port=rule["to_port"],
                cidr_blocks=rule.get("cidr_blocks", []),
                description=rule.get("description"),
            )
            for rule in egress_rules
        ],
        tags=tags,
        opts=opts,
    )
