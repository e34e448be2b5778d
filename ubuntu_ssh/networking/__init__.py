"""
Networking infrastructure components.
"""

from .vpc import (
    Network,
    create_network,
    create_vpc,
    create_subnet,
    create_nat_gateway,
    get_availability_zones,
    subnet_cidrs,
)

__all__ = [
    'Network',
    'create_network',
    'create_vpc',
    'create_subnet',
    'create_nat_gateway',
    'get_availability_zones',
    'subnet_cidrs',
]
