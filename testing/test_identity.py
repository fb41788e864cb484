"""Tests for identity lookup."""

import getpass
import socket
import sys

from exec_logger.identity import (
    ENV_USER_DOMAIN,
    EnvironmentIdentity,
    Identity,
    resolve_identity,
)


class PartialIdentity:
    """Hostname lookup fails, username is empty."""

    def exe_name(self) -> str:
        return "worker"

    def hostname(self) -> str:
        raise OSError("resolver unavailable")

    def username(self) -> str:
        return ""


def test_resolve_fixed_identity(identity):
    assert resolve_identity(identity) == Identity("app.py", "build-host", "alice")


def test_failures_fall_back_per_field():
    """Each field falls back to Unknown independently."""
    resolved = resolve_identity(PartialIdentity())
    assert resolved.exe_name == "worker"
    assert resolved.system_name == "Unknown"
    assert resolved.user_name == "Unknown"


def test_username_with_domain(monkeypatch):
    monkeypatch.setattr(getpass, "getuser", lambda: "bob")
    monkeypatch.setenv(ENV_USER_DOMAIN, "CORP")
    assert EnvironmentIdentity().username() == "CORP\\bob"


def test_username_without_domain(monkeypatch):
    monkeypatch.setattr(getpass, "getuser", lambda: "bob")
    monkeypatch.delenv(ENV_USER_DOMAIN, raising=False)
    assert EnvironmentIdentity().username() == "bob"


def test_exe_name_from_argv(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["/opt/tools/nightly_job.py", "--fast"])
    assert EnvironmentIdentity().exe_name() == "nightly_job.py"


def test_environment_identity_resolves(monkeypatch):
    monkeypatch.setattr(socket, "gethostname", lambda: "db-01")
    monkeypatch.setattr(getpass, "getuser", lambda: "svc")
    monkeypatch.delenv(ENV_USER_DOMAIN, raising=False)

    resolved = resolve_identity()

    assert resolved.system_name == "db-01"
    assert resolved.user_name == "svc"
    assert resolved.exe_name != ""
