"""
Client attribution chain (X-Forwarded-For) building.
"""
from .gateway_types import GatewayRole

CHAIN_SEPARATOR = ","


def append_forwarded(existing_chain: str, role: GatewayRole, local_public_address: str) -> str:
    """
    Append this gateway's public address to the attribution chain.

    The origin hop concatenates its address without a separator; every later
    hop adds a comma before its own address. Earlier entries are never touched.
    """
    existing_chain = existing_chain or ""
    if role is GatewayRole.ORIGIN:
        return existing_chain + local_public_address
    return existing_chain + CHAIN_SEPARATOR + local_public_address
