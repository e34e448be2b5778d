"""
EC2 infrastructure components.
"""

from .instances import (
    create_instance,
    load_user_data,
    build_instance_tags,
    get_instance_public_ip,
    get_instance_private_ip,
    get_instance_public_dns,
)
from .security_groups import (
    create_security_group,
    build_ingress_rules,
    default_egress_rules,
    parse_ports,
    IngressRule,
)
from .keypairs import (
    select_keypair,
    create_keypair,
    get_keypair,
    CreatedKeyPair,
    ExistingKeyPair,
    KeyPairSelection,
)

__all__ = [
    'create_instance',
    'load_user_data',
    'build_instance_tags',
    'get_instance_public_ip',
    'get_instance_private_ip',
    'get_instance_public_dns',
    'create_security_group',
    'build_ingress_rules',
    'default_egress_rules',
    'parse_ports',
    'IngressRule',
    'select_keypair',
    'create_keypair',
    'get_keypair',
    'CreatedKeyPair',
    'ExistingKeyPair',
    'KeyPairSelection',
]
