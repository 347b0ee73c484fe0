import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from config_client.config import ConfigLoadRequest, YamlConfigLoader
from config_client.errors import InvalidSettings

CONFIG_YAML = """
logging:
  level: DEBUG
spring:
  cloud:
    config:
      uri: http://config.example.com:8888
      name: foo
      env: development
      username: user
"""


class YamlConfigLoaderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.yaml_path = Path(self._tmp.name) / "config.yaml"
        self.yaml_path.write_text(CONFIG_YAML, encoding="utf-8")

    def _request(self, **kwargs) -> ConfigLoadRequest:
        return ConfigLoadRequest(yaml_path=str(self.yaml_path), env_prefix="CFGTEST__", dotenv_path=None, **kwargs)

    async def test_yaml_values_are_merged_over_defaults(self) -> None:
        config = await YamlConfigLoader().load(self._request())

        self.assertEqual(config.logging.level, "DEBUG")
        section = config.spring.cloud.config
        self.assertEqual(section.uri, "http://config.example.com:8888")
        self.assertTrue(section.validate_certificates)

        settings = config.client_settings()
        self.assertEqual(settings.name, "foo")
        self.assertEqual(settings.environment, "development")
        self.assertEqual(settings.username, "user")
        self.assertEqual(settings.timeout_seconds, 5.0)

    async def test_env_overrides_are_validated_by_type(self) -> None:
        overrides = {
            "CFGTEST__SPRING__CLOUD__CONFIG__LABEL": "v2",
            "CFGTEST__SPRING__CLOUD__CONFIG__FAIL_FAST": "true",
            "CFGTEST__SPRING__CLOUD__CONFIG__TIMEOUT_SECONDS": "2.5",
        }
        with mock.patch.dict(os.environ, overrides):
            config = await YamlConfigLoader().load(self._request())

        settings = config.client_settings()
        self.assertEqual(settings.label, "v2")
        self.assertIs(settings.fail_fast, True)
        self.assertEqual(settings.timeout_seconds, 2.5)

    async def test_unknown_env_override_path_is_rejected(self) -> None:
        with mock.patch.dict(os.environ, {"CFGTEST__SPRING__CLOUD__CONFIG__NOPE": "x"}):
            with self.assertRaises(KeyError):
                await YamlConfigLoader().load(self._request())

    async def test_mapping_cannot_be_overridden(self) -> None:
        with mock.patch.dict(os.environ, {"CFGTEST__LOGGING__FILE": "x"}):
            with self.assertRaises(TypeError):
                await YamlConfigLoader().load(self._request())

    async def test_override_through_a_scalar_is_rejected(self) -> None:
        with mock.patch.dict(os.environ, {"CFGTEST__LOGGING__LEVEL__NAME": "x"}):
            with self.assertRaises(TypeError):
                await YamlConfigLoader().load(self._request())

    async def test_unknown_yaml_keys_are_rejected(self) -> None:
        self.yaml_path.write_text("spring:\n  cloud:\n    config:\n      bogus: 1\n", encoding="utf-8")
        with self.assertRaises(ValidationError):
            await YamlConfigLoader().load(self._request())

    async def test_missing_file_raises(self) -> None:
        request = ConfigLoadRequest(yaml_path=str(Path(self._tmp.name) / "missing.yaml"), dotenv_path=None)
        with self.assertRaises(FileNotFoundError):
            await YamlConfigLoader().load(request)

    async def test_dotenv_values_feed_overrides(self) -> None:
        dotenv_path = Path(self._tmp.name) / ".env"
        dotenv_path.write_text("CFGTEST__SPRING__CLOUD__CONFIG__PASSWORD=from-dotenv\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {}):
            request = ConfigLoadRequest(
                yaml_path=str(self.yaml_path),
                env_prefix="CFGTEST__",
                dotenv_path=str(dotenv_path),
            )
            config = await YamlConfigLoader().load(request)
        self.assertEqual(config.client_settings().password, "from-dotenv")

    async def test_blank_application_name_fails_when_building_settings(self) -> None:
        self.yaml_path.write_text("logging:\n  level: INFO\n", encoding="utf-8")
        config = await YamlConfigLoader().load(self._request())
        with self.assertRaises(InvalidSettings):
            config.client_settings()


if __name__ == "__main__":
    unittest.main()
