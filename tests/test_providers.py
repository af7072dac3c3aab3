# -*- coding: utf-8 -*-
"""MageAgent client 测试：用 httpx.MockTransport 代替真实服务。"""

from __future__ import annotations

import json
import os

import httpx
import pytest

from beat2comic.providers.orchestration import MageAgentClient, MageAgentConfig, load_mage_agent_client


ENV_KEYS = ("MAGEAGENT_URL", "MAGEAGENT_API_KEY", "MAGEAGENT_TIMEOUT_S")


def _client(handler, api_key=""):
	cfg = MageAgentConfig(base_url="http://mage.test", api_key=api_key)
	return MageAgentClient(cfg, transport=httpx.MockTransport(handler))


@pytest.fixture
def clean_env(monkeypatch):
	for k in ENV_KEYS:
		monkeypatch.delenv(k, raising=False)
	return monkeypatch


class TestOrchestrate:
	def test_request_shape(self):
		seen = {}

		def handler(request: httpx.Request) -> httpx.Response:
			seen["path"] = request.url.path
			seen["auth"] = request.headers.get("Authorization")
			seen["body"] = json.loads(request.content)
			seen["timeout"] = request.extensions.get("timeout")
			return httpx.Response(
				200,
				json={"taskId": "t-42", "status": "completed", "progress": 100, "result": '{"shotType": "close-up"}'},
			)

		with _client(handler, api_key="secret") as client:
			out = client.orchestrate("design comic panel composition", {"panel_number": 1}, max_agents=2, timeout_ms=15000)

		assert seen["path"] == "/api/orchestrate"
		assert seen["auth"] == "Bearer secret"
		assert seen["body"] == {
			"task": "design comic panel composition",
			"context": {"panel_number": 1},
			"maxAgents": 2,
			"timeout_ms": 15000,
		}
		assert seen["timeout"]["read"] == 15.0
		assert out["task_id"] == "t-42"
		assert out["status"] == "completed"
		assert out["result"] == '{"shotType": "close-up"}'

	def test_no_auth_header_without_key(self):
		seen = {}

		def handler(request):
			seen["auth"] = request.headers.get("Authorization")
			return httpx.Response(200, json={"status": "completed", "result": {}})

		with _client(handler) as client:
			client.orchestrate("t", {})
		assert seen["auth"] is None

	def test_http_error(self):
		with _client(lambda request: httpx.Response(503, text="overloaded")) as client:
			with pytest.raises(ValueError, match="HTTP 503"):
				client.orchestrate("t", {})

	def test_non_json_body(self):
		with _client(lambda request: httpx.Response(200, text="<html>")) as client:
			with pytest.raises(ValueError, match="not JSON"):
				client.orchestrate("t", {})

	def test_failed_status(self):
		handler = lambda request: httpx.Response(200, json={"status": "failed", "error": "no agents"})
		with _client(handler) as client:
			with pytest.raises(ValueError, match="no agents"):
				client.orchestrate("t", {})


class TestHealthCheck:
	def test_healthy(self):
		def handler(request):
			assert request.url.path == "/api/health"
			return httpx.Response(200, json={"status": "healthy", "version": "1.4.0"})

		with _client(handler) as client:
			h = client.health_check()
		assert h["healthy"] is True
		assert h["version"] == "1.4.0"
		assert h["latency_ms"] >= 0

	def test_unreachable_never_raises(self):
		def handler(request):
			raise httpx.ConnectError("connection refused", request=request)

		with _client(handler) as client:
			h = client.health_check()
		assert h["healthy"] is False
		assert h["version"] is None


class TestLoadClient:
	def test_defaults(self, tmp_path, clean_env):
		with load_mage_agent_client(project_root=str(tmp_path)) as client:
			assert client.cfg.base_url == "http://nexus-mageagent:8080"
			assert client.cfg.api_key == ""
			assert client.cfg.timeout_s == 30.0

	def test_dotenv(self, tmp_path, clean_env):
		(tmp_path / ".env").write_text(
			"MAGEAGENT_URL=http://localhost:9999\nMAGEAGENT_API_KEY=abc\nMAGEAGENT_TIMEOUT_S=12\n",
			encoding="utf-8",
		)
		with load_mage_agent_client(project_root=str(tmp_path)) as client:
			assert client.cfg.base_url == "http://localhost:9999"
			assert client.cfg.api_key == "abc"
			assert client.cfg.timeout_s == 12.0

	def test_explicit_args_win(self, tmp_path, clean_env):
		clean_env.setenv("MAGEAGENT_URL", "http://from-env:1")
		with load_mage_agent_client(project_root=str(tmp_path), base_url="http://explicit:2") as client:
			assert client.cfg.base_url == "http://explicit:2"

	def test_dotenv_beats_process_env(self, tmp_path, clean_env):
		clean_env.setenv("MAGEAGENT_URL", "http://from-env:1")
		clean_env.setenv("MAGEAGENT_API_KEY", "env-key")
		(tmp_path / ".env").write_text("MAGEAGENT_URL=http://from-dotenv:2\n", encoding="utf-8")

		with load_mage_agent_client(project_root=str(tmp_path)) as client:
			assert client.cfg.base_url == "http://from-dotenv:2"
			# .env 没写的键仍然取环境变量
			assert client.cfg.api_key == "env-key"

		# .env 只读取，不写回进程环境
		assert os.environ["MAGEAGENT_URL"] == "http://from-env:1"
