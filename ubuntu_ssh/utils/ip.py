import requests
from typing import Optional

IP_SERVICES = ('https://api.ipify.org', 'https://ifconfig.me')

def get_local_public_ip(timeout: float = 5.0) -> Optional[str]:
    """
    Get the public IP address of the local machine.
    
    Returns:
        Optional[str]: The public IP address or None if it can't be determined
    """
    for url in IP_SERVICES:
        try:
            response = requests.get(url, timeout=timeout)
        except requests.RequestException:
            continue
        if response.status_code == 200 and response.text.strip():
            return response.text.strip()
    return None

def format_cidr_from_ip(ip: str, suffix: str = "/32") -> str:
    """
    Format an IP address as a CIDR block.
    
    Args:
        ip: The IP address
        suffix: The CIDR suffix (default: /32 for single IP)
        
    Returns:
        str: The formatted CIDR block
    """
    return f"{ip}{suffix}"
