"""Tests for the command line interface."""
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dependency_exporter import __version__
from dependency_exporter.cli import main
from dependency_exporter.exporter import output_directory, output_path

MANIFEST = """
root_dir: my-build
projects:
  - group: com.acme
    name: app
    version: "1.0"
    configurations:
      compile:
        resolved:
          - coordinates: org.foo:bar:2.0
      testCompile:
        unresolved:
          - org.baz:qux:3.0
      detached:
        error: cannot resolve detached configuration
  - group: com.acme
    name: lib
    version: "1.0"
"""

REPORT = r"""
compileClasspath - Compile classpath for source set 'main'.
+--- org.foo:bar:2.0
\--- org.baz:qux:3.0 FAILED
"""

EXPECTED_APP = (
    '{"groupId":"com.acme","artifactId":"app","version":"1.0","scopes":[],'
    '"dependencies":['
    '{"groupId":"org.foo","artifactId":"bar","version":"2.0","scopes":["compile"],'
    '"dependencies":[]},'
    '{"groupId":"org.baz","artifactId":"qux","version":"3.0","scopes":["testCompile"],'
    '"unresolved":"true","dependencies":[]}]}'
)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from an empty directory holding a manifest."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "build.yaml").write_text(MANIFEST, encoding="utf-8")
    return tmp_path


class TestMainGroup:
    """Tests for the command group."""

    def test_help(self, cli_runner: CliRunner) -> None:
        """Test the group help text."""
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Dependency Exporter - Write Gradle dependency graphs as JSON." in result.output
        for command in ("export", "export-report", "show", "path"):
            assert command in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        """Test the version option."""
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestExportCommand:
    """Tests for the export command."""

    def test_export_manifest(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that every project is written and the exit code is 0."""
        out = workspace / "out"
        result = cli_runner.invoke(main, ["export", "build.yaml", "--output-root", str(out)])

        assert result.exit_code == 0, result.output
        assert "Exported Dependency Graphs" in result.output
        app = output_path("my-build", "app", out).read_text(encoding="utf-8")
        assert app == EXPECTED_APP
        lib = json.loads(output_path("my-build", "lib", out).read_text(encoding="utf-8"))
        assert lib["dependencies"] == []

    def test_export_selected_project(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that --project limits the export."""
        out = workspace / "out"
        result = cli_runner.invoke(
            main, ["export", "build.yaml", "-p", "lib", "--output-root", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert [p.name for p in output_directory("my-build", out).iterdir()] == ["lib.json"]

    def test_unknown_project(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that an unknown project name is an error."""
        result = cli_runner.invoke(
            main, ["export", "build.yaml", "-p", "nope", "--output-root", "out"]
        )
        assert result.exit_code == 2
        assert not (workspace / "out").exists()

    def test_verbose_lists_skipped(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that verbose output names skipped configurations."""
        result = cli_runner.invoke(
            main, ["export", "build.yaml", "--output-root", "out", "--verbose"]
        )
        assert result.exit_code == 0, result.output
        assert "skipped detached" in result.output

    def test_quiet(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test the one-line quiet status."""
        result = cli_runner.invoke(main, ["export", "build.yaml", "--output-root", "out", "-q"])
        assert result.exit_code == 0
        assert "OK - 2 exported" in result.output

    def test_verbose_and_quiet_conflict(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that --verbose and --quiet cannot be combined."""
        result = cli_runner.invoke(main, ["export", "build.yaml", "-v", "-q"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_write_failure_exit_code(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that a project that cannot be written gives exit code 1."""
        out = workspace / "out"
        output_path("my-build", "app", out).mkdir(parents=True)

        result = cli_runner.invoke(main, ["export", "build.yaml", "--output-root", str(out)])

        assert result.exit_code == 1
        assert "✗ app" in result.output
        assert output_path("my-build", "lib", out).is_file()

    def test_invalid_manifest(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that an invalid manifest gives exit code 2."""
        (workspace / "bad.yaml").write_text("- not a mapping\n", encoding="utf-8")
        result = cli_runner.invoke(main, ["export", "bad.yaml"])
        assert result.exit_code == 2

    def test_output_root_from_config(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that the configuration file supplies the output root and indent."""
        config = workspace / "exporter.yaml"
        config.write_text(
            f"output_root: {workspace / 'configured'}\nindent: 2\n"
            "ignored_configurations: ['test*']\n",
            encoding="utf-8",
        )
        result = cli_runner.invoke(main, ["export", "build.yaml", "-c", str(config)])

        assert result.exit_code == 0, result.output
        written = output_path("my-build", "app", workspace / "configured")
        content = written.read_text(encoding="utf-8")
        assert "\n" in content
        assert [d["artifactId"] for d in json.loads(content)["dependencies"]] == ["bar"]


class TestExportReportCommand:
    """Tests for the export-report command."""

    def test_export_report(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test exporting a project straight from a report."""
        (workspace / "deps.txt").write_text(REPORT, encoding="utf-8")
        result = cli_runner.invoke(
            main,
            [
                "export-report",
                "deps.txt",
                "--group",
                "com.acme",
                "--name",
                "app",
                "--version",
                "1.0",
                "--root-dir",
                "my-build",
                "--output-root",
                "out",
            ],
        )

        assert result.exit_code == 0, result.output
        document = json.loads(
            output_path("my-build", "app", Path("out")).read_text(encoding="utf-8")
        )
        assert [
            (d["artifactId"], d["scopes"], d.get("unresolved"))
            for d in document["dependencies"]
        ] == [
            ("bar", ["compileClasspath"], None),
            ("qux", ["compileClasspath"], "true"),
        ]

    def test_root_dir_defaults_to_cwd(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that the current directory name is the default root dir."""
        (workspace / "deps.txt").write_text(REPORT, encoding="utf-8")
        result = cli_runner.invoke(
            main,
            [
                "export-report",
                "deps.txt",
                "--group",
                "g",
                "--name",
                "app",
                "--version",
                "1",
                "--output-root",
                "out",
            ],
        )
        assert result.exit_code == 0, result.output
        assert output_path(workspace.name, "app", Path("out")).is_file()

    def test_empty_report(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that a report without configurations is an error."""
        (workspace / "deps.txt").write_text("BUILD SUCCESSFUL\n", encoding="utf-8")
        result = cli_runner.invoke(
            main,
            ["export-report", "deps.txt", "--group", "g", "--name", "a", "--version", "1"],
        )
        assert result.exit_code == 2


class TestShowCommand:
    """Tests for the show command."""

    def test_show_json(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that JSON output matches the exported file text."""
        result = cli_runner.invoke(main, ["show", "build.yaml", "-p", "app", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == EXPECTED_APP
        assert not (workspace / ".jfrog-ide-plugins").exists()

    def test_show_tree(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test the terminal tree output."""
        result = cli_runner.invoke(main, ["show", "build.yaml", "-p", "app"])
        assert result.exit_code == 0, result.output
        assert "com.acme:app:1.0" in result.output
        assert "unresolved" in result.output

    def test_show_unknown_project(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that an unknown project is an error."""
        result = cli_runner.invoke(main, ["show", "build.yaml", "-p", "nope"])
        assert result.exit_code == 2


class TestPathCommand:
    """Tests for the path command."""

    def test_build_directory(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test printing the build directory."""
        result = cli_runner.invoke(main, ["path", "my-build", "--output-root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output.strip() == str(output_directory("my-build", tmp_path))

    def test_project_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test printing one project's file."""
        result = cli_runner.invoke(
            main, ["path", "my-build", "app", "--output-root", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert result.output.strip().endswith("bXktYnVpbGQ=/app.json")

    def test_output_root_from_discovered_config(
        self, cli_runner: CliRunner, workspace: Path
    ) -> None:
        """Test that path reports the file export wrote under the configured root."""
        out = workspace / "configured"
        (workspace / ".dependency-exporter.yaml").write_text(
            f"output_root: {out}\n", encoding="utf-8"
        )
        exported = cli_runner.invoke(main, ["export", "build.yaml", "-q"])
        assert exported.exit_code == 0, exported.output

        result = cli_runner.invoke(main, ["path", "my-build", "app"])

        assert result.exit_code == 0, result.output
        printed = Path(result.output.strip())
        assert printed == output_path("my-build", "app", out)
        assert printed.is_file()

    def test_flag_overrides_config(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that --output-root wins over the configuration file."""
        config = workspace / "exporter.yaml"
        config.write_text(f"output_root: {workspace / 'configured'}\n", encoding="utf-8")
        result = cli_runner.invoke(
            main, ["path", "my-build", "-c", str(config), "--output-root", "flag"]
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip() == str(output_directory("my-build", Path("flag")))

    def test_invalid_config(self, cli_runner: CliRunner, workspace: Path) -> None:
        """Test that an invalid configuration file is an error."""
        (workspace / ".dependency-exporter.yaml").write_text("indent: wide\n", encoding="utf-8")
        result = cli_runner.invoke(main, ["path", "my-build"])
        assert result.exit_code == 2
