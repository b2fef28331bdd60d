import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import aiohttp

from apollo_env.client import fetch_config, fetch_config_sync, try_fetch_config
from apollo_env.core.errors import MissingRequiredField, RemoteFetchFailure
from apollo_env.core.models import FetchRequest

from fake_config_server import FakeConfigServer


class FetchConfigTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.server = FakeConfigServer()
        await self.server.start()
        self._tmp = tempfile.TemporaryDirectory()
        self.base_dir = Path(self._tmp.name)

    async def asyncTearDown(self) -> None:
        await self.server.close()
        self._tmp.cleanup()

    def _descriptor(self, **overrides) -> dict:
        data = {
            "app_id": "demo",
            "cluster_name": "default",
            "config_server_url": self.server.url,
        }
        data.update(overrides)
        return data

    async def test_merges_namespaces(self) -> None:
        self.server.set_json("a", {"configurations": {"x": "1"}})
        self.server.set_json("b", {"configurations": {"x": "2", "y": "3"}})
        data = await fetch_config(self._descriptor(namespace_name=["a", "b"]))
        self.assertEqual(data, {"x": "2", "y": "3"})

    async def test_default_namespace_and_query(self) -> None:
        self.server.set_json("application", {"configurations": {"k": "v"}})
        await fetch_config(self._descriptor(is_cache=True, release_key="R", client_ip="1.2.3.4"))
        self.assertEqual(self.server.requests, ["/configs/demo/default/application?releaseKey=R&ip=1.2.3.4"])

    async def test_missing_field_fails_before_network(self) -> None:
        for field in ("app_id", "cluster_name", "config_server_url"):
            with self.subTest(field=field):
                with self.assertRaises(MissingRequiredField):
                    await fetch_config(self._descriptor(**{field: ""}))
        self.assertEqual(self.server.requests, [])

    async def test_one_failing_namespace_fails_whole_call(self) -> None:
        self.server.set_json("a", {"configurations": {"x": "1"}})
        self.server.set_raw("b", 500, "{}")
        with self.assertRaises(RemoteFetchFailure):
            await fetch_config(
                self._descriptor(namespace_name=["a", "b"], create_env=True, env_file_name="x.env"),
                base_dir=self.base_dir,
            )
        self.assertFalse((self.base_dir / "x.env").exists())

    async def test_creates_env_file_and_sets_environment(self) -> None:
        self.server.set_json("a", {"configurations": {"APOLLO_ENV_TEST_X": "1"}})
        self.server.set_json("b", {"configurations": {"APOLLO_ENV_TEST_X": "2", "APOLLO_ENV_TEST_Y": "3"}})
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APOLLO_ENV_TEST_X", None)
            os.environ.pop("APOLLO_ENV_TEST_Y", None)
            data = await fetch_config(
                self._descriptor(namespace_name=["a", "b"], create_env=True, env_file_name="apollo.env"),
                base_dir=self.base_dir,
            )
            for key, value in data.items():
                self.assertEqual(os.environ[key], value)
        content = (self.base_dir / "apollo.env").read_text(encoding="utf-8")
        self.assertEqual(content, "APOLLO_ENV_TEST_X=2\nAPOLLO_ENV_TEST_Y=3\n")

    async def test_is_set_env_false_only_writes_file(self) -> None:
        self.server.set_json("application", {"configurations": {"APOLLO_ENV_TEST_Z": "1"}})
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APOLLO_ENV_TEST_Z", None)
            await fetch_config(
                self._descriptor(create_env=True, env_file_name="apollo.env", is_set_env=False),
                base_dir=self.base_dir,
            )
            self.assertNotIn("APOLLO_ENV_TEST_Z", os.environ)
        self.assertTrue((self.base_dir / "apollo.env").exists())

    async def test_before_clear_false_appends(self) -> None:
        (self.base_dir / "apollo.env").write_text("EXISTING=1\n", encoding="utf-8")
        self.server.set_json("application", {"configurations": {"NEW": "2"}})
        await fetch_config(
            self._descriptor(create_env=True, env_file_name="apollo.env", is_set_env=False, before_clear=False),
            base_dir=self.base_dir,
        )
        content = (self.base_dir / "apollo.env").read_text(encoding="utf-8")
        self.assertEqual(content, "EXISTING=1\nNEW=2\n")

    async def test_uses_injected_session(self) -> None:
        self.server.set_json("application", {"configurations": {"k": "v"}})
        async with aiohttp.ClientSession() as session:
            data = await fetch_config(FetchRequest(**self._descriptor()), session=session)
            self.assertFalse(session.closed)
        self.assertEqual(data, {"k": "v"})

    async def test_try_fetch_config_reports_error(self) -> None:
        result = await try_fetch_config(self._descriptor(app_id=""))
        self.assertFalse(result.ok)
        self.assertIsNone(result.data)
        self.assertIsInstance(result.error, MissingRequiredField)

    async def test_try_fetch_config_reports_undecodable_body(self) -> None:
        self.server.set_raw("application", 200, b'{"k": "\xff\xfe"}')
        result = await try_fetch_config(self._descriptor())
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, RemoteFetchFailure)

    async def test_dollar_values_reach_environment_unexpanded(self) -> None:
        self.server.set_json(
            "application",
            {"configurations": {"APOLLO_ENV_TEST_PW": "a${APOLLO_ENV_TEST_HOME}b", "APOLLO_ENV_TEST_HOME": "x"}},
        )
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APOLLO_ENV_TEST_PW", None)
            os.environ.pop("APOLLO_ENV_TEST_HOME", None)
            data = await fetch_config(
                self._descriptor(create_env=True, env_file_name="apollo.env"),
                base_dir=self.base_dir,
            )
            self.assertEqual(data["APOLLO_ENV_TEST_PW"], "a${APOLLO_ENV_TEST_HOME}b")
            self.assertEqual(os.environ["APOLLO_ENV_TEST_PW"], "a${APOLLO_ENV_TEST_HOME}b")

    async def test_try_fetch_config_success(self) -> None:
        self.server.set_json("application", {"configurations": {"k": "v"}})
        result = await try_fetch_config(self._descriptor())
        self.assertTrue(result.ok)
        self.assertEqual(result.data, {"k": "v"})
        self.assertIsNone(result.error)


class FetchConfigSyncTests(unittest.TestCase):
    def test_missing_field_raises(self) -> None:
        with self.assertRaises(MissingRequiredField):
            fetch_config_sync({"app_id": "demo", "cluster_name": "default"})


if __name__ == "__main__":
    unittest.main()
