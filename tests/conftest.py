"""Shared fixtures for DepLens tests."""

import logging

import pytest


GOPKG_LOCK_CONTENT = '''# This file is autogenerated, do not edit; changes may be undone by the next 'dep ensure'.


[[projects]]
  name = "github.com/pkg/errors"
  packages = ["."]
  revision = "645ef00459ed84a119197bfb8d8205042c6df63d"
  version = "v0.8.0"

[[projects]]
  branch = "master"
  name = "golang.org/x/net"
  packages = [
    ".",
    "context",
    "http2"
  ]
  revision = "1c05540f6879653db88113bc4a2b70aec4bd491f"

[solve-meta]
  analyzer-name = "dep"
  analyzer-version = 1
  inputs-digest = "1b2ad8d1e4c2d7a7ab4bb7e0b3d2e1b1f8b5ad8e5d6a1f4c9e7a2b3c4d5e6f70"
  solver-name = "gps-cdcl"
  solver-version = 1
'''

GODEPS_JSON_CONTENT = '''{
    "ImportPath": "github.com/example/app",
    "GoVersion": "go1.9",
    "Deps": [
        {
            "ImportPath": "github.com/Sirupsen/logrus",
            "Comment": "v0.11.0-12-g1234abc",
            "Rev": "ba1b36c82c5e05c4f912a88eab0dcd91a171688f"
        },
        {
            "ImportPath": "golang.org/x/sys/unix",
            "Rev": "8f0908ab3b2457e2e15403d3697c9ef5cb4b57a9"
        }
    ]
}
'''

VENDOR_CONF_CONTENT = '''# runc dependencies
github.com/opencontainers/runtime-spec v1.0.0
github.com/sirupsen/logrus a3f95b5c423586578a4e099b11a46c2479628cac
golang.org/x/sys 7ddbeae9ae08c6a06a59597f0c9edbc5ff2444ce https://github.com/golang/sys
'''


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    package_logger = logging.getLogger("dep_lens")
    handlers = list(root.handlers)
    root_level = root.level
    package_level = package_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    package_logger.setLevel(package_level)


@pytest.fixture
def gopkg_lock(tmp_path):
    """Create a Gopkg.lock file."""
    lock_file = tmp_path / "Gopkg.lock"
    lock_file.write_text(GOPKG_LOCK_CONTENT)
    return lock_file


@pytest.fixture
def godeps_json(tmp_path):
    """Create a Godeps.json file."""
    godeps_file = tmp_path / "Godeps.json"
    godeps_file.write_text(GODEPS_JSON_CONTENT)
    return godeps_file


@pytest.fixture
def vendor_conf(tmp_path):
    """Create a vendor.conf file."""
    conf_file = tmp_path / "vendor.conf"
    conf_file.write_text(VENDOR_CONF_CONTENT)
    return conf_file
