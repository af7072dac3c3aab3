# -*- coding: utf-8 -*-
"""
compose_panel/skill.py

这个文件做什么：
- 把“单格构图”封装成一个 skill：
  1) build context
  2) 调用远程编排服务（单次、带超时、不重试）
  3) 解析 + 归一化构图
  4) 生成美术指导文字
  5) 任何失败：回退到固定构图（medium-shot / eye-level / two-point / 画面中心）

注意：
- synthesize() 永远不抛异常；是否回退看 CompositionResult.used_fallback。
- 人物/台词/音效由 core.assembler 从 Moment 生成，与远程调用成败无关。
- 远程 client 通过构造函数注入；client=None 时每一格都走回退。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from beat2comic.core.assembler import build_dialogue, identify_sfx, place_characters
from beat2comic.core.schemas import Moment, PanelComposition, Point

from .art_direction import build_art_direction
from .parser import parse_composition_response
from .prompt import build_context
from .schema import TASK_NAME, CompositionResult, OrchestrationClient


logger = logging.getLogger(__name__)


@dataclass
class ComposeConfig:
	timeout_ms: int = 15000
	max_agents: int = 2


def fallback_composition() -> PanelComposition:
	return PanelComposition(
		shot_type="medium-shot",
		angle="eye-level",
		perspective="two-point",
		focal_point=Point(0.5, 0.5),
	)


class CompositionSynthesizer:
	def __init__(self, client: Optional[OrchestrationClient] = None, cfg: Optional[ComposeConfig] = None):
		self.client = client
		self.cfg = cfg or ComposeConfig()

	def synthesize(self, moment: Moment, style: str, panel_number: int) -> CompositionResult:
		if self.client is None:
			return self.fallback(moment, style, panel_number, reason="no orchestration client configured")

		try:
			response = self.client.orchestrate(
				task=TASK_NAME,
				context=build_context(moment, style, panel_number),
				max_agents=self.cfg.max_agents,
				timeout_ms=self.cfg.timeout_ms,
			)

			if not isinstance(response, dict) or response.get("result") is None:
				raise ValueError("orchestration response has no result")

			composition = parse_composition_response(response["result"])

		except Exception as e:
			# 单次失败即回退，保证流水线不中断
			return self.fallback(moment, style, panel_number, reason=str(e) or type(e).__name__)

		logger.debug("panel %d: composition %s / %s", panel_number, composition.shot_type, composition.angle)

		return CompositionResult(
			composition=composition,
			art_direction=build_art_direction(composition, style),
			characters=place_characters(moment),
			dialogue=build_dialogue(moment),
			sfx=identify_sfx(moment),
			used_fallback=False,
			error="",
		)

	def fallback(self, moment: Moment, style: str, panel_number: int, reason: str) -> CompositionResult:
		logger.warning("panel %d: composition fallback (%s)", panel_number, reason)

		composition = fallback_composition()
		return CompositionResult(
			composition=composition,
			art_direction=build_art_direction(composition, style),
			characters=place_characters(moment),
			dialogue=build_dialogue(moment),
			sfx=identify_sfx(moment),
			used_fallback=True,
			error=reason,
		)
