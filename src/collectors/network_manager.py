"""NetworkManager collaborator built on the ``nmcli`` command-line tool.

Provides the tunnel/Wi-Fi directory, the connection status source and the
action sink used by the dashboard. Queries degrade to empty results when nmcli
is missing or fails; actions are spawned and never awaited.
"""

from typing import List, Optional, Set

from .commands import run_command, spawn_detached, split_terse
from .exceptions import CommandError
from ..engine.selection import ListKind
from ..utils.logger import get_logger

logger = get_logger(__name__)

NMCLI = "nmcli"
TUNNEL_TYPES = ("vpn", "wireguard")
CONNECTION_EDITOR = "nm-connection-editor"


def parse_tunnel_connections(output: str) -> List[str]:
    """Extract tunnel connection names from ``nmcli -t -f NAME,TYPE`` output."""
    names = []
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = split_terse(line)
        if len(fields) < 2:
            continue
        name, conn_type = fields[0], fields[1]
        if name and conn_type in TUNNEL_TYPES:
            names.append(name)
    return names


def parse_wifi_ssids(output: str) -> List[str]:
    """Extract a sorted, de-duplicated SSID list from ``nmcli -t -f SSID dev wifi list``."""
    ssids = set()
    for line in output.splitlines():
        ssid = split_terse(line)[0]
        if ssid and ssid != "--":
            ssids.add(ssid)
    return sorted(ssids)


def parse_active_ssid(output: str) -> Optional[str]:
    """Find the associated SSID in ``nmcli -t -f ACTIVE,SSID dev wifi`` output."""
    for line in output.splitlines():
        fields = split_terse(line)
        if len(fields) >= 2 and fields[0] == "yes":
            return fields[1] or None
    return None


class NetworkManagerClient:
    """Directory, status source and action sink backed by nmcli."""

    # ---- directory ----

    def list_tunnels(self) -> List[str]:
        """Configured VPN and WireGuard connection names, sorted."""
        output = self._query(["-t", "-f", "NAME,TYPE", "connection", "show"], "tunnel list")
        return sorted(set(parse_tunnel_connections(output)))

    def list_wifi_networks(self) -> List[str]:
        """Visible Wi-Fi network names, sorted and de-duplicated."""
        output = self._query(["-t", "-f", "SSID", "dev", "wifi", "list"], "Wi-Fi scan")
        return parse_wifi_ssids(output)

    # ---- status ----

    def active_tunnels(self) -> Set[str]:
        """Names of tunnel connections that are currently active."""
        output = self._query(["-t", "-f", "NAME,TYPE", "connection", "show", "--active"], "active connections")
        return set(parse_tunnel_connections(output))

    def active_ssid(self) -> Optional[str]:
        """The SSID the Wi-Fi device is associated with, if any."""
        # Polled every tick; only the explicit list refresh may trigger a scan
        output = self._query(["-t", "-f", "ACTIVE,SSID", "dev", "wifi", "list", "--rescan", "no"], "active Wi-Fi")
        return parse_active_ssid(output)

    # ---- actions ----

    def connect(self, kind: ListKind, name: str, secret: str) -> None:
        """Bring a tunnel or Wi-Fi network up, passing the secret on stdin."""
        if kind is ListKind.VPN:
            args = [NMCLI, "connection", "up", "id", name, "--ask"]
        else:
            args = [NMCLI, "dev", "wifi", "connect", name, "--ask"]
        logger.info(f"Connecting {kind.value} '{name}'")
        spawn_detached(args, stdin_text=secret)

    def disconnect(self, name: str) -> None:
        """Take a connection down."""
        logger.info(f"Disconnecting '{name}'")
        spawn_detached([NMCLI, "connection", "down", "id", name])

    def open_external_editor(self) -> None:
        """Launch the graphical connection editor."""
        spawn_detached([CONNECTION_EDITOR])

    def _query(self, args: List[str], what: str) -> str:
        try:
            return run_command([NMCLI, *args])
        except CommandError as e:
            logger.warning(f"Failed to get {what}: {e}")
            return ""
