import ipaddress
import pulumi
import pulumi_aws as aws
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple

from ..exceptions import ConfigurationError


@dataclass
class Network:
    """Resources making up the deployment's network."""
    vpc: aws.ec2.Vpc
    public_subnets: List[aws.ec2.Subnet]
    private_subnets: List[aws.ec2.Subnet] = field(default_factory=list)
    nat_gateway: Optional[aws.ec2.NatGateway] = None

    @property
    def public_subnet_ids(self) -> List[pulumi.Output[str]]:
        return [subnet.id for subnet in self.public_subnets]

    @property
    def private_subnet_ids(self) -> List[pulumi.Output[str]]:
        return [subnet.id for subnet in self.private_subnets]


def create_vpc(
    name: str,
    cidr_block: str,
    enable_dns_hostnames: bool = True,
    enable_dns_support: bool = True,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> Tuple[aws.ec2.Vpc, aws.ec2.RouteTable]:
    """
    Create a VPC with an internet gateway and a public route table.

    Args:
        name: Name of the VPC
        cidr_block: CIDR block for the VPC
        enable_dns_hostnames: Whether to enable DNS hostnames
        enable_dns_support: Whether to enable DNS support
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        Tuple[aws.ec2.Vpc, aws.ec2.RouteTable]: The created VPC and public route table
    """
    vpc = aws.ec2.Vpc(
        name,
        cidr_block=cidr_block,
        enable_dns_hostnames=enable_dns_hostnames,
        enable_dns_support=enable_dns_support,
        tags=tags,
        opts=opts,
    )

    igw = aws.ec2.InternetGateway(
        f"{name}-igw",
        vpc_id=vpc.id,
        tags=tags,
        opts=opts,
    )

    public_rt = aws.ec2.RouteTable(
        f"{name}-public-rt",
        vpc_id=vpc.id,
        routes=[
            aws.ec2.RouteTableRouteArgs(
                cidr_block="0.0.0.0/0",
                gateway_id=igw.id,
            ),
        ],
        tags=tags,
        opts=opts,
    )

    return vpc, public_rt


def create_subnet(
    name: str,
    vpc_id: pulumi.Input[str],
    cidr_block: str,
    availability_zone: str,
    map_public_ip_on_launch: bool = True,
    tags: Optional[Dict[str, str]] = None,
    route_table_id: Optional[pulumi.Input[str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.Subnet:
    """
    Create a subnet in the specified VPC.

    Args:
        name: Name of the subnet
        vpc_id: ID of the VPC
        cidr_block: CIDR block for the subnet
        availability_zone: Availability zone for the subnet
        map_public_ip_on_launch: Whether to map public IP on launch
        tags: Optional dictionary of tags
        route_table_id: Optional ID of a route table to associate the subnet with
        opts: Optional resource options

    Returns:
        aws.ec2.Subnet: The created subnet
    """
    subnet = aws.ec2.Subnet(
        name,
        vpc_id=vpc_id,
        cidr_block=cidr_block,
        availability_zone=availability_zone,
        map_public_ip_on_launch=map_public_ip_on_launch,
        tags=tags,
        opts=opts,
    )

    if route_table_id:
        aws.ec2.RouteTableAssociation(
            f"{name}-rt-association",
            subnet_id=subnet.id,
            route_table_id=route_table_id,
            opts=opts,
        )

    return subnet


def get_availability_zones() -> List[str]:
    """
    Get a list of available availability zones in the current region.

    Returns:
        List[str]: List of availability zone names
    """
    zones = aws.get_availability_zones(state="available")
    return zones.names


def subnet_cidrs(vpc_cidr: str, count: int, offset: int = 0, prefix: int = 24) -> List[str]:
    """
    Carve consecutive subnet blocks out of a VPC CIDR.

    subnet_cidrs("10.0.0.0/16", 2, offset=1) == ["10.0.1.0/24", "10.0.2.0/24"]

    Raises:
        ConfigurationError: If the VPC CIDR is invalid or too small
    """
    try:
        network = ipaddress.ip_network(vpc_cidr)
    except ValueError as e:
        raise ConfigurationError(f"Invalid vpcCidr '{vpc_cidr}'", context=str(e)) from None
    if network.prefixlen > prefix:
        raise ConfigurationError(f"vpcCidr '{vpc_cidr}' is smaller than a /{prefix} subnet")

    blocks = []
    for index, block in enumerate(network.subnets(new_prefix=prefix)):
        if index >= offset + count:
            break
        if index >= offset:
            blocks.append(str(block))
    if len(blocks) < count:
        raise ConfigurationError(f"vpcCidr '{vpc_cidr}' cannot hold {offset + count} /{prefix} subnets")
    return blocks


def create_nat_gateway(
    name: str,
    public_subnet_id: pulumi.Input[str],
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.NatGateway:
    """
    Create a NAT gateway with its own Elastic IP in a public subnet.

    Args:
        name: Name of the NAT gateway
        public_subnet_id: Subnet to place the gateway in
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.NatGateway: The created NAT gateway
    """
    eip = aws.ec2.Eip(
        f"{name}-eip",
        domain="vpc",
        tags=tags,
        opts=opts,
    )
    return aws.ec2.NatGateway(
        name,
        allocation_id=eip.id,
        subnet_id=public_subnet_id,
        tags=tags,
        opts=opts,
    )


def create_network(
    name: str,
    vpc_cidr: str = "10.0.0.0/16",
    availability_zones: int = 1,
    enable_nat_gateway: bool = False,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> Network:
    """
    Create a VPC with one public subnet per availability zone.

    With enable_nat_gateway a private subnet is added per zone, all routed
    through a single NAT gateway placed in the first public subnet.

    Args:
        name: Base name for the network resources
        vpc_cidr: CIDR block for the VPC
        availability_zones: Number of availability zones to span
        enable_nat_gateway: Whether to add private subnets behind a NAT gateway
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        Network: The created network resources
    """
    if availability_zones < 1:
        raise ConfigurationError(f"availabilityZones must be at least 1, got {availability_zones}")

    tags = tags or {}
    public_cidrs = subnet_cidrs(vpc_cidr, availability_zones)
    private_cidrs = (
        subnet_cidrs(vpc_cidr, availability_zones, offset=availability_zones)
        if enable_nat_gateway else []
    )

    zones = get_availability_zones()
    if len(zones) < availability_zones:
        raise ConfigurationError(
            f"availabilityZones={availability_zones} but the region only has {len(zones)}"
        )
    zones = zones[:availability_zones]
    pulumi.log.info(f"Creating network {name} across {', '.join(zones)}")

    vpc, public_rt = create_vpc(
        name=f"{name}-vpc",
        cidr_block=vpc_cidr,
        tags={**tags, "Name": f"{name}-vpc"},
        opts=opts,
    )

    public_subnets = [
        create_subnet(
            name=f"{name}-public-{index}",
            vpc_id=vpc.id,
            cidr_block=cidr,
            availability_zone=zone,
            map_public_ip_on_launch=True,
            tags={**tags, "Name": f"{name}-public-{index}"},
            route_table_id=public_rt.id,
            opts=opts,
        )
        for index, (zone, cidr) in enumerate(zip(zones, public_cidrs))
    ]

    if not enable_nat_gateway:
        return Network(vpc=vpc, public_subnets=public_subnets)

    nat_gateway = create_nat_gateway(
        name=f"{name}-nat",
        public_subnet_id=public_subnets[0].id,
        tags={**tags, "Name": f"{name}-nat"},
        opts=opts,
    )
    private_rt = aws.ec2.RouteTable(
        f"{name}-private-rt",
        vpc_id=vpc.id,
        routes=[
            aws.ec2.RouteTableRouteArgs(
                cidr_block="0.0.0.0/0",
                nat_gateway_id=nat_gateway.id,
            ),
        ],
        tags={**tags, "Name": f"{name}-private-rt"},
        opts=opts,
    )
    private_subnets = [
        create_subnet(
            name=f"{name}-private-{index}",
            vpc_id=vpc.id,
            cidr_block=cidr,
            availability_zone=zone,
            map_public_ip_on_launch=False,
            tags={**tags, "Name": f"{name}-private-{index}"},
            route_table_id=private_rt.id,
            opts=opts,
        )
        for index, (zone, cidr) in enumerate(zip(zones, private_cidrs))
    ]

    return Network(
        vpc=vpc,
        public_subnets=public_subnets,
        private_subnets=private_subnets,
        nat_gateway=nat_gateway,
    )
