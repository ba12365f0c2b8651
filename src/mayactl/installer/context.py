"""Data shared across the install steps"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union


def parse_member_ips(member_ips: str) -> Tuple[str, ...]:
    """Split a comma separated address list, dropping blank entries.

    Addresses are not validated; they are handed to the scripts verbatim.
    """
    if not member_ips or not member_ips.strip():
        return ()
    return tuple(ip.strip() for ip in member_ips.split(",") if ip.strip())


def derive_server_count(peer_ips: Union[str, Sequence[str]]) -> int:
    """Number of servers in the cluster, this machine included."""
    if isinstance(peer_ips, str):
        peer_ips = parse_member_ips(peer_ips)
    else:
        peer_ips = [ip for ip in peer_ips if ip.strip()]
    # Members never include self
    return len(peer_ips) + 1


@dataclass
class InstallContext:
    """Installation state for a single run"""

    peer_ips: Tuple[str, ...] = ()
    self_ip: str = ""
    server_count: int = 0

    @classmethod
    def from_options(cls, member_ips: str = "", self_ip: str = "") -> "InstallContext":
        return cls(peer_ips=parse_member_ips(member_ips), self_ip=self_ip or "")

    def downstream_env(self) -> dict:
        """Environment handed to the role and start scripts"""
        return {
            "MAYA_SELF_IP": self.self_ip,
            "MAYA_MEMBER_IPS": ",".join(self.peer_ips),
            "MAYA_SERVER_COUNT": str(self.server_count),
        }
