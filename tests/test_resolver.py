"""Tests for manager selection and resolution."""

import logging
import subprocess

import pytest

from dep_lens.core.config import ResolverConfig
from dep_lens.core.resolver import (
    GoDependencyManager,
    GoDependencyResolver,
    resolve_dependencies,
)


def error_records(caplog):
    return [record for record in caplog.records if record.levelno >= logging.ERROR]


class TestGoDependencyManager:
    """Test the manager enumeration."""

    @pytest.mark.parametrize("manager, manifest, remediation", [
        (GoDependencyManager.DEP, "Gopkg.lock", "dep init"),
        (GoDependencyManager.GODEP, "Godeps.json", "godep save"),
        (GoDependencyManager.VNDR, "vendor.conf", "vndr init"),
    ])
    def test_manifest_and_remediation(self, manager, manifest, remediation):
        assert manager.manifest_name == manifest
        assert manager.remediation == remediation
        assert manager.bom_pattern == "**/*" + manifest

    def test_from_value(self):
        assert GoDependencyManager.from_value("DEP") is GoDependencyManager.DEP
        assert GoDependencyManager.from_value(" vndr ") is GoDependencyManager.VNDR

    def test_from_value_unknown(self):
        with pytest.raises(ValueError, match="Unsupported dependency manager 'glide'"):
            GoDependencyManager.from_value("glide")


class TestResolverConfig:
    """Test resolver configuration."""

    def test_defaults(self):
        config = ResolverConfig()
        assert config.flush_trailing_stanza is False
        assert config.skip_malformed_lines is True
        assert config.ignore_source_files is False

    def test_unknown_encoding(self):
        with pytest.raises(ValueError, match="Unknown encoding"):
            ResolverConfig(encoding="no-such-codec")


class TestGoDependencyResolver:
    """Test resolution through the manager-selection boundary."""

    def test_resolve_dep(self, gopkg_lock, tmp_path):
        result = GoDependencyResolver(GoDependencyManager.DEP).resolve(tmp_path)

        assert result.ok
        assert result.manifest == gopkg_lock
        assert len(result.dependencies) == 4
        assert result.to_records()[0] == {
            "namespace": "pkg",
            "name": "github.com/pkg/errors",
            "version": "v0.8.0",
            "revision": "645ef00459ed84a119197bfb8d8205042c6df63d",
            "ecosystem": "go",
        }

    def test_resolve_godep(self, godeps_json, tmp_path):
        result = resolve_dependencies(tmp_path, GoDependencyManager.GODEP)

        assert result.ok
        assert [dep.version for dep in result.dependencies] == ["v0.11.0", None]

    def test_resolve_vndr(self, vendor_conf, tmp_path):
        result = resolve_dependencies(tmp_path, GoDependencyManager.VNDR)

        assert result.ok
        assert len(result.dependencies) == 3

    @pytest.mark.parametrize("manager", list(GoDependencyManager))
    def test_missing_manifest(self, tmp_path, caplog, manager):
        """A missing manifest gives zero records and exactly one diagnostic."""
        with caplog.at_level(logging.ERROR):
            result = GoDependencyResolver(manager).resolve(tmp_path)

        assert result.dependencies == []
        assert not result.ok
        assert result.error == (
            f"Can't find {manager.manifest_name} file.  "
            f"Please run '{manager.remediation}' command"
        )
        assert [record.getMessage() for record in error_records(caplog)] == [result.error]

    def test_manifest_path_is_directory(self, tmp_path):
        (tmp_path / "Gopkg.lock").mkdir()

        result = GoDependencyResolver(GoDependencyManager.DEP).resolve(tmp_path)

        assert result.dependencies == []
        assert "Can't find Gopkg.lock" in result.error

    def test_no_manager(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            result = GoDependencyResolver(None).resolve(tmp_path)

        assert result.error == "No valid dependency manager was defined"
        assert len(error_records(caplog)) == 1

    def test_malformed_json_is_reported(self, tmp_path, caplog):
        (tmp_path / "Godeps.json").write_text("{not json")

        with caplog.at_level(logging.ERROR):
            result = GoDependencyResolver(GoDependencyManager.GODEP).resolve(tmp_path)

        assert result.dependencies == []
        assert result.error.startswith("Malformed manifest")
        assert len(error_records(caplog)) == 1

    def test_unreadable_manifest_is_reported(self, tmp_path):
        (tmp_path / "vendor.conf").write_bytes(b"example.com/pkg \xff\xfe\n")

        result = GoDependencyResolver(GoDependencyManager.VNDR).resolve(tmp_path)

        assert result.dependencies == []
        assert result.error.startswith("Can't read")

    def test_strict_vendor_conf(self, tmp_path):
        (tmp_path / "vendor.conf").write_text("example.com/a 1\nexample.com/b\n")
        config = ResolverConfig(skip_malformed_lines=False)

        result = GoDependencyResolver(GoDependencyManager.VNDR, config).resolve(tmp_path)

        assert result.dependencies == []
        assert ":2" in result.error

    def test_strict_vendor_conf_accepts_aligned_columns(self, tmp_path):
        (tmp_path / "vendor.conf").write_text("github.com/a/b   rev1\ngithub.com/c/d\trev2\n")
        config = ResolverConfig(skip_malformed_lines=False)

        result = GoDependencyResolver(GoDependencyManager.VNDR, config).resolve(tmp_path)

        assert result.ok
        assert [dep.revision for dep in result.dependencies] == ["rev1", "rev2"]

    def test_undecodable_godeps_json_is_unreadable(self, tmp_path):
        (tmp_path / "Godeps.json").write_bytes(b'{"Deps": [{"ImportPath": "\xff"}]}')

        result = GoDependencyResolver(GoDependencyManager.GODEP).resolve(tmp_path)

        assert result.dependencies == []
        assert result.error.startswith("Can't read")

    def test_lenient_vendor_conf_logs_skipped_line(self, tmp_path, caplog):
        (tmp_path / "vendor.conf").write_text("example.com/a 1\nexample.com/b\n")

        with caplog.at_level(logging.WARNING):
            result = GoDependencyResolver(GoDependencyManager.VNDR).resolve(tmp_path)

        assert result.ok
        assert [dep.name for dep in result.dependencies] == ["example.com/a"]
        assert any("malformed line" in record.getMessage() for record in caplog.records)

    def test_flush_trailing_stanza_config(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text('[[projects]]\n  name = "example.com/a"\n')

        default = GoDependencyResolver(GoDependencyManager.DEP).resolve(tmp_path)
        flushed = GoDependencyResolver(
            GoDependencyManager.DEP, ResolverConfig(flush_trailing_stanza=True)
        ).resolve(tmp_path)

        assert default.dependencies == []
        assert [dep.name for dep in flushed.dependencies] == ["example.com/a"]

    def test_failed_ensure_logs_warning(self, gopkg_lock, tmp_path, caplog):
        calls = []

        def ensure(root):
            calls.append(root)
            return False

        with caplog.at_level(logging.WARNING):
            result = GoDependencyResolver(GoDependencyManager.DEP, ensure_runner=ensure).resolve(tmp_path)

        assert calls == [tmp_path]
        assert result.ok
        assert len(result.dependencies) == 4
        assert len(result.warnings) == 1
        assert "dep ensure" in result.warnings[0]

    def test_ensure_raising_is_a_failed_ensure(self, gopkg_lock, tmp_path):
        def ensure(root):
            raise subprocess.TimeoutExpired(cmd="dep ensure", timeout=1)

        result = GoDependencyResolver(GoDependencyManager.DEP, ensure_runner=ensure).resolve(tmp_path)

        assert result.ok
        assert len(result.warnings) == 1

    def test_ensure_only_runs_for_dep(self, godeps_json, tmp_path):
        calls = []

        GoDependencyResolver(
            GoDependencyManager.GODEP, ensure_runner=lambda root: calls.append(root)
        ).resolve(tmp_path)

        assert calls == []

    def test_excludes(self, tmp_path):
        config = ResolverConfig(ignore_source_files=True)

        assert GoDependencyResolver(GoDependencyManager.DEP, config).get_excludes() == {"**/*.go"}
        assert GoDependencyResolver(GoDependencyManager.DEP).get_excludes() == set()

    def test_resolve_twice_is_identical(self, gopkg_lock, tmp_path):
        resolver = GoDependencyResolver(GoDependencyManager.DEP)

        assert resolver.resolve(tmp_path).to_records() == resolver.resolve(tmp_path).to_records()
