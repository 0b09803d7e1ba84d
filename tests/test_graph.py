"""Tests for the graph builder."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from plugin_graph.exceptions import PluginsDirError
from plugin_graph.graph import build_graph


class TestNodeDiscovery:
    def test_one_package_per_manifest(self, plugins_dir: Path):
        graph = build_graph(plugins_dir)
        assert set(graph.packages) == {"acme/core", "acme/widgets"}
        widgets = graph.packages["acme/widgets"]
        assert widgets.folder_name == "widgets"
        assert widgets.is_external is False

    def test_name_differs_from_folder(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "my-folder", "vendor/real-name")
        graph = build_graph(tmp_path)
        assert graph.packages["vendor/real-name"].folder_name == "my-folder"

    def test_folder_without_manifest_skipped(self, plugins_dir: Path, make_plugin):
        make_plugin(plugins_dir, "empty", None)
        graph = build_graph(plugins_dir)
        assert len(graph.packages) == 2
        assert [s.folder_name for s in graph.skipped] == ["empty"]
        assert graph.packages["acme/widgets"].dependencies == ["acme/core"]

    def test_malformed_manifest_skipped(self, plugins_dir: Path):
        broken = plugins_dir / "broken"
        broken.mkdir()
        (broken / "composer.json").write_text("{oops")
        graph = build_graph(plugins_dir)
        assert len(graph.packages) == 2
        assert [s.folder_name for s in graph.skipped] == ["broken"]

    def test_plain_files_ignored(self, plugins_dir: Path):
        (plugins_dir / "README.md").write_text("hello")
        graph = build_graph(plugins_dir)
        assert len(graph.packages) == 2
        assert graph.skipped == []

    def test_duplicate_name_last_folder_wins(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "a-copy", "acme/dup", {"acme/x": "*"})
        make_plugin(tmp_path, "b-copy", "acme/dup", {"acme/y": "*"})
        graph = build_graph(tmp_path)
        assert len(graph.packages) == 1
        dup = graph.packages["acme/dup"]
        assert dup.folder_name == "b-copy"
        assert graph.external_counts == {"acme/y": 1}

    def test_missing_root_is_fatal(self, tmp_path: Path):
        with pytest.raises(PluginsDirError):
            build_graph(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path: Path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(PluginsDirError):
            build_graph(f)

    def test_empty_root(self, tmp_path: Path):
        graph = build_graph(tmp_path)
        assert graph.packages == {}
        assert graph.external_counts == {}


class TestEdgesWithoutExternal:
    def test_scenario(self, plugins_dir: Path):
        graph = build_graph(plugins_dir, show_external=False)
        assert len(graph.packages) == 2
        assert graph.packages["acme/widgets"].dependencies == ["acme/core"]
        assert graph.packages["acme/core"].dependencies == []
        assert graph.external_counts == {"guzzlehttp/guzzle": 1}

    def test_bare_keys_ignored(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "p", "acme/p", {"php": ">=8", "ext-json": "*", "lib-icu": "*"})
        graph = build_graph(tmp_path)
        assert graph.packages["acme/p"].dependencies == []
        assert graph.external_counts == {}

    def test_registry_never_gains_externals(self, plugins_dir: Path, make_plugin):
        make_plugin(plugins_dir, "extra", "acme/extra", {"symfony/console": "*", "acme/core": "*"})
        graph = build_graph(plugins_dir)
        assert set(graph.packages) == {"acme/core", "acme/widgets", "acme/extra"}
        for package in graph.packages.values():
            for dep in package.dependencies:
                assert dep in {"acme/core", "acme/widgets", "acme/extra"}

    def test_counter_counts_each_dependent(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "a", "acme/a", {"monolog/monolog": "*"})
        make_plugin(tmp_path, "b", "acme/b", {"monolog/monolog": "*"})
        graph = build_graph(tmp_path)
        assert graph.external_counts == {"monolog/monolog": 2}


class TestEdgesWithExternal:
    def test_scenario(self, plugins_dir: Path):
        graph = build_graph(plugins_dir, show_external=True)
        assert len(graph.packages) == 3
        guzzle = graph.packages["guzzlehttp/guzzle"]
        assert guzzle.is_external is True
        assert guzzle.folder_name == "guzzlehttp/guzzle"
        assert guzzle.dependencies == []
        assert graph.packages["acme/widgets"].dependencies == [
            "acme/core",
            "guzzlehttp/guzzle",
        ]
        assert graph.external_counts == {"guzzlehttp/guzzle": 1}

    def test_external_node_created_once(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "a", "acme/a", {"monolog/monolog": "*"})
        make_plugin(tmp_path, "b", "acme/b", {"monolog/monolog": "*"})
        graph = build_graph(tmp_path, show_external=True)
        externals = [p for p in graph.packages.values() if p.is_external]
        assert [p.name for p in externals] == ["monolog/monolog"]
        assert graph.external_counts == {"monolog/monolog": 2}
        assert graph.packages["acme/a"].dependencies == ["monolog/monolog"]
        assert graph.packages["acme/b"].dependencies == ["monolog/monolog"]

    def test_internal_targets_stay_internal(self, plugins_dir: Path):
        graph = build_graph(plugins_dir, show_external=True)
        assert graph.packages["acme/core"].is_external is False
        assert [p.name for p in graph.internal_packages()] == ["acme/core", "acme/widgets"]


class TestScanWarnings:
    def test_missing_manifest_warns(self, plugins_dir: Path, make_plugin):
        make_plugin(plugins_dir, "empty", None)
        with capture_logs() as logs:
            build_graph(plugins_dir)
        skipped = [e for e in logs if e["event"] == "scan.manifest_skipped"]
        assert len(skipped) == 1
        assert skipped[0]["log_level"] == "warning"
        assert skipped[0]["folder"] == "empty"
        assert skipped[0]["error"] == "ManifestNotFoundError"

    def test_malformed_manifest_warns(self, plugins_dir: Path):
        broken = plugins_dir / "broken"
        broken.mkdir()
        (broken / "composer.json").write_text("{oops")
        with capture_logs() as logs:
            build_graph(plugins_dir)
        skipped = [e for e in logs if e["event"] == "scan.manifest_skipped"]
        assert [(e["folder"], e["error"]) for e in skipped] == [("broken", "ManifestParseError")]

    def test_duplicate_name_warns(self, tmp_path: Path, make_plugin):
        make_plugin(tmp_path, "a-copy", "acme/dup")
        make_plugin(tmp_path, "b-copy", "acme/dup")
        with capture_logs() as logs:
            build_graph(tmp_path)
        dups = [e for e in logs if e["event"] == "scan.duplicate_name"]
        assert len(dups) == 1
        assert dups[0]["log_level"] == "warning"
        assert dups[0]["name"] == "acme/dup"
        assert dups[0]["kept"] == "b-copy"
        assert dups[0]["replaced"] == "a-copy"

    def test_clean_scan_has_no_warnings(self, plugins_dir: Path):
        with capture_logs() as logs:
            build_graph(plugins_dir)
        assert [e for e in logs if e["log_level"] == "warning"] == []
