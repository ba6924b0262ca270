from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest

from singlebuild.build_tool import DEFAULT_BUILD_ARGUMENTS, DEFAULT_RELATIVE_PATH
from singlebuild.config_loader import (
    CONFIG_ENV_VAR,
    ConfigError,
    Settings,
    load_config_file,
    load_settings,
    locate_config_file,
    parse_settings,
)


class ConfigurationLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_defaults_without_file(self) -> None:
        settings = load_settings(None)
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.pattern, "*.csproj")
        self.assertEqual(settings.build_tool.env_var, "SystemRoot")
        self.assertEqual(settings.build_tool.relative_path, DEFAULT_RELATIVE_PATH)
        self.assertEqual(settings.build_tool.arguments, DEFAULT_BUILD_ARGUMENTS)
        self.assertIsNone(settings.build_tool.path)

    def test_supports_toml_configs(self) -> None:
        path = self.root / "singlebuild.toml"
        path.write_text(
            textwrap.dedent(
                """
                [search]
                pattern = "*.vbproj"

                [build_tool]
                path = "/usr/local/bin/msbuild"
                arguments = ["/t:Build", "/nologo"]
                """
            )
        )
        settings = load_settings(path)
        self.assertEqual(settings.pattern, "*.vbproj")
        self.assertEqual(settings.build_tool.path, Path("/usr/local/bin/msbuild"))
        self.assertEqual(settings.build_tool.arguments, ("/t:Build", "/nologo"))

    def test_supports_json_configs(self) -> None:
        path = self.root / "singlebuild.json"
        path.write_text('{"build_tool": {"env_var": "MSBUILD_ROOT", "relative_path": "bin/msbuild"}}')
        settings = load_settings(path)
        self.assertEqual(settings.build_tool.env_var, "MSBUILD_ROOT")
        self.assertEqual(settings.build_tool.relative_path, Path("bin/msbuild"))
        self.assertEqual(settings.pattern, "*.csproj")

    def test_supports_yaml_configs(self) -> None:
        path = self.root / "singlebuild.yaml"
        path.write_text(
            textwrap.dedent(
                """
                search:
                  pattern: "*.fsproj"
                """
            )
        )
        self.assertEqual(load_settings(path).pattern, "*.fsproj")

    def test_empty_yaml_yields_defaults(self) -> None:
        path = self.root / "empty.yml"
        path.write_text("")
        self.assertEqual(load_settings(path), Settings())

    def test_rejects_unknown_extension(self) -> None:
        path = self.root / "singlebuild.ini"
        path.write_text("[search]")
        with self.assertRaises(ConfigError):
            load_config_file(path)

    def test_rejects_non_mapping_root(self) -> None:
        path = self.root / "list.json"
        path.write_text("[1, 2]")
        with self.assertRaises(ConfigError):
            load_config_file(path)

    def test_rejects_malformed_toml(self) -> None:
        path = self.root / "broken.toml"
        path.write_text("[search\npattern = ")
        with self.assertRaises(ConfigError):
            load_config_file(path)

    def test_rejects_wrong_types(self) -> None:
        with self.assertRaises(ConfigError):
            parse_settings({"search": "*.csproj"})
        with self.assertRaises(ConfigError):
            parse_settings({"build_tool": {"arguments": "/t:Build"}})
        with self.assertRaises(ConfigError):
            parse_settings({"build_tool": {"arguments": ["/t:Build", 3]}})
        with self.assertRaises(ConfigError):
            parse_settings({"search": {"pattern": ""}})

    def test_missing_file_is_an_error(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(self.root / "absent.toml")

    def test_locate_prefers_cli_over_environment(self) -> None:
        explicit = self.root / "cli.toml"
        env = {CONFIG_ENV_VAR: str(self.root / "env.toml")}
        self.assertEqual(locate_config_file(explicit, env), explicit)
        self.assertEqual(locate_config_file(None, env), self.root / "env.toml")
        self.assertIsNone(locate_config_file(None, {}))


if __name__ == "__main__":  # pragma: no cover - manual execution
    unittest.main()
