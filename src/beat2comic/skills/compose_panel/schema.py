# -*- coding: utf-8 -*-
"""
compose_panel/schema.py

- CompositionResult：skill 的输出，显式区分“远程成功”与“回退”。
- OrchestrationClient：skill 依赖的远程能力（协议），构造时注入。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from beat2comic.core.schemas import ComicCharacter, Dialogue, PanelComposition, SoundEffect


__all__ = ["CompositionResult", "OrchestrationClient", "TASK_NAME"]

TASK_NAME = "design comic panel composition"


class OrchestrationClient(Protocol):
	"""
	远程编排服务接口：
	- 返回值至少带 result 字段（JSON 字符串或 dict）
	- 任何失败直接抛异常，由 skill 兜底
	"""

	def orchestrate(
		self,
		task: str,
		context: Dict[str, Any],
		max_agents: int,
		timeout_ms: int,
	) -> Dict[str, Any]:
		...


@dataclass
class CompositionResult:
	composition: PanelComposition
	art_direction: str
	characters: List[ComicCharacter] = field(default_factory=list)
	dialogue: List[Dialogue] = field(default_factory=list)
	sfx: List[SoundEffect] = field(default_factory=list)
	used_fallback: bool = False
	error: str = ""

	@property
	def ok(self) -> bool:
		return not self.used_fallback
