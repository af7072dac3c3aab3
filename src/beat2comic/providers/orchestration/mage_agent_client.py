# -*- coding: utf-8 -*-
"""
providers/orchestration/mage_agent_client.py

这个文件做什么：
- 提供一个很薄的 MageAgent 编排服务 client，供 compose_panel skill 调用。
- 支持从项目根目录的 .env 读取配置。
- 对外方法：
  - orchestrate(task, context, max_agents, timeout_ms) -> dict
  - health_check() -> dict（不抛异常）

配置来源优先级（从高到低）：
1) 显式传参（base_url/api_key/timeout_s）
2) .env 文件
3) 系统环境变量

约定：
- 不重试、不做熔断：一次超时就是这一格的终态，由 skill 回退。
- 非 2xx、响应形状不对：raise ValueError。
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from dotenv import dotenv_values


DEFAULT_BASE_URL = "http://nexus-mageagent:8080"


@dataclass
class MageAgentConfig:
	base_url: str = DEFAULT_BASE_URL
	api_key: str = ""
	timeout_s: float = 30.0


class MageAgentClient:
	def __init__(self, cfg: MageAgentConfig, transport: Optional[httpx.BaseTransport] = None):
		self.cfg = cfg

		headers = {
			"Content-Type": "application/json",
			"Accept": "application/json",
			"User-Agent": "beat2comic/0.1",
		}
		if cfg.api_key:
			headers["Authorization"] = f"Bearer {cfg.api_key}"

		self._client = httpx.Client(
			base_url=cfg.base_url,
			timeout=httpx.Timeout(cfg.timeout_s),
			headers=headers,
			transport=transport,
		)

	def close(self) -> None:
		self._client.close()

	def __enter__(self) -> "MageAgentClient":
		return self

	def __exit__(self, *exc: Any) -> None:
		self.close()

	def orchestrate(
		self,
		task: str,
		context: Dict[str, Any],
		max_agents: int = 2,
		timeout_ms: int = 15000,
	) -> Dict[str, Any]:
		payload = {
			"task": task,
			"context": context,
			"maxAgents": max_agents,
			"timeout_ms": timeout_ms,
		}

		# 单次请求超时以调用方的 timeout_ms 为准
		r = self._client.post("/api/orchestrate", json=payload, timeout=timeout_ms / 1000)

		if r.status_code < 200 or r.status_code >= 300:
			body = r.text
			if len(body) > 1000:
				body = body[:1000] + "...(truncated)"
			raise ValueError(f"MageAgent HTTP {r.status_code}: {body}")

		try:
			data = r.json()
		except Exception:
			raise ValueError(f"MageAgent response is not JSON: {r.text[:1000]}")

		if not isinstance(data, dict):
			raise ValueError(f"Unexpected response shape: {json.dumps(data, ensure_ascii=False)[:1000]}")

		if data.get("status") == "failed":
			raise ValueError(f"MageAgent task failed: {data.get('error') or 'unknown error'}")

		return {
			"task_id": data.get("taskId") or data.get("task_id"),
			"status": data.get("status"),
			"progress": data.get("progress") or 0,
			"result": data.get("result"),
			"error": data.get("error"),
		}

	def health_check(self) -> Dict[str, Any]:
		start = time.monotonic()
		try:
			r = self._client.get("/api/health", timeout=5.0)
			latency_ms = (time.monotonic() - start) * 1000
			data = r.json() if r.content else {}
			return {
				"healthy": r.status_code == 200 or data.get("status") == "healthy",
				"latency_ms": latency_ms,
				"version": data.get("version"),
			}
		except (httpx.HTTPError, ValueError):
			return {"healthy": False, "latency_ms": (time.monotonic() - start) * 1000, "version": None}


def _read_dotenv_if_present(project_root: Path) -> Dict[str, str]:
	"""
	读取项目根目录的 .env（如果存在），只返回键值，不写入 os.environ。
	"""
	env_path = project_root / ".env"
	if not env_path.exists():
		return {}
	return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def _setting(name: str, dotenv: Dict[str, str], default: str = "") -> str:
	# .env 优先于进程环境变量
	return (dotenv.get(name) or os.environ.get(name) or default).strip()


def load_mage_agent_client(
	project_root: Optional[str] = None,
	base_url: Optional[str] = None,
	api_key: Optional[str] = None,
	timeout_s: Optional[float] = None,
) -> MageAgentClient:
	"""
	加载 MageAgent client。

	MAGEAGENT_URL 缺省时用集群内默认地址；API key 可选。
	"""
	root = Path(project_root or os.getcwd()).resolve()
	dotenv = _read_dotenv_if_present(root)

	url = (base_url or _setting("MAGEAGENT_URL", dotenv)).strip() or DEFAULT_BASE_URL
	key = (api_key or _setting("MAGEAGENT_API_KEY", dotenv)).strip()
	t = float(timeout_s or _setting("MAGEAGENT_TIMEOUT_S", dotenv) or 30)

	cfg = MageAgentConfig(base_url=url, api_key=key, timeout_s=t)
	return MageAgentClient(cfg)
