"""Tests for the installation context"""

import pytest

from mayactl.installer import InstallContext, derive_server_count, parse_member_ips


class TestServerCount:
    """Test server count derivation"""

    @pytest.mark.parametrize("member_ips", ["", " ", "\t\n", ",", " , ,"])
    def test_empty_members_is_single_server(self, member_ips):
        """No members means this machine is the only server"""
        assert derive_server_count(member_ips) == 1

    def test_two_members(self):
        """Members plus self"""
        assert derive_server_count("10.0.0.2,10.0.0.3") == 3

    def test_blank_entries_are_ignored(self):
        """Empty comma separated entries do not count"""
        assert derive_server_count("10.0.0.2,,10.0.0.3, ") == 3

    def test_accepts_parsed_sequence(self):
        """Already split lists are counted directly"""
        assert derive_server_count(("10.0.0.2",)) == 2
        assert derive_server_count([]) == 1

    def test_parsed_sequence_skips_blanks(self):
        """Blank entries in a parsed list do not count either"""
        assert derive_server_count(["", " "]) == 1
        assert derive_server_count(["10.0.0.2", ""]) == 2


class TestInstallContext:
    """Test context construction"""

    def test_member_ips_are_trimmed_not_validated(self):
        """Addresses pass through as given, minus surrounding spaces"""
        assert parse_member_ips(" 10.0.0.2 , not-an-ip") == ("10.0.0.2", "not-an-ip")

    def test_from_options(self):
        """Context starts unresolved with no server count"""
        ctx = InstallContext.from_options("10.0.0.2,10.0.0.3", "")
        assert ctx.peer_ips == ("10.0.0.2", "10.0.0.3")
        assert ctx.self_ip == ""
        assert ctx.server_count == 0

    def test_self_ip_kept_verbatim(self):
        """Supplied self IP is not rewritten"""
        ctx = InstallContext.from_options("", "192.168.1.7")
        assert ctx.self_ip == "192.168.1.7"

    def test_downstream_env(self):
        """Scripts receive the derived values as strings"""
        ctx = InstallContext(peer_ips=("10.0.0.2", "10.0.0.3"), self_ip="10.0.0.1", server_count=3)
        assert ctx.downstream_env() == {
            "MAYA_SELF_IP": "10.0.0.1",
            "MAYA_MEMBER_IPS": "10.0.0.2,10.0.0.3",
            "MAYA_SERVER_COUNT": "3",
        }
