# -*- coding: utf-8 -*-
"""
beat2comic/pipeline/panel_generator.py

目的：
- 生成流水线：Beat -> GeneratedPanels。
  1) extract_moments：切句/打标（或直接用 beat.moments）
  2) select_moments：按 target_pages * panels_per_page 挑选
  3) 逐个 moment：CompositionSynthesizer -> assemble_panel（严格顺序、一次一个）
  4) pack_pages：顺序切页

注意：
- 远程调用串行发出，日志顺序与叙事顺序一致。
- cancel_event 被 set 之后不再发任何远程请求，剩余 moment 全部走回退；
  panel 数量与顺序不变。
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from beat2comic.core.assembler import assemble_panel
from beat2comic.core.moments import extract_moments
from beat2comic.core.page_layout import pack_pages
from beat2comic.core.schemas import COMIC_STYLES, Beat, ComicPanel, GeneratedPanels
from beat2comic.core.selector import select_moments
from beat2comic.skills.compose_panel.skill import ComposeConfig, CompositionSynthesizer


logger = logging.getLogger(__name__)


@dataclass
class GenerationConfig:
	panels_per_page: int = 6
	compose: ComposeConfig = field(default_factory=ComposeConfig)


class PanelGenerator:
	def __init__(self, synthesizer: Optional[CompositionSynthesizer] = None, cfg: Optional[GenerationConfig] = None):
		self.cfg = cfg or GenerationConfig()
		self.synthesizer = synthesizer or CompositionSynthesizer(client=None, cfg=self.cfg.compose)

	def generate(
		self,
		beat: Beat,
		target_pages: int,
		style: str = "traditional",
		cancel_event: Optional[threading.Event] = None,
	) -> GeneratedPanels:
		if target_pages < 1:
			raise ValueError(f"target_pages must be >= 1, got {target_pages}")
		if style not in COMIC_STYLES:
			raise ValueError(f"unknown style: {style} (expected one of {', '.join(COMIC_STYLES)})")

		moments = extract_moments(beat)
		selected = select_moments(moments, target_pages * self.cfg.panels_per_page)
		logger.info(
			"beat %d: %d moment(s), %d selected for %d page(s)",
			beat.beat_number, len(moments), len(selected), target_pages,
		)

		panels: List[ComicPanel] = []
		fallbacks = 0
		for i, moment in enumerate(selected):
			panel_number = i + 1
			if cancel_event is not None and cancel_event.is_set():
				composed = self.synthesizer.fallback(moment, style, panel_number, reason="cancelled")
			else:
				composed = self.synthesizer.synthesize(moment, style, panel_number)

			if composed.used_fallback:
				fallbacks += 1
			panels.append(assemble_panel(moment, composed, panel_number))

		if fallbacks:
			logger.info("beat %d: %d/%d panel(s) used fallback composition", beat.beat_number, fallbacks, len(panels))

		return GeneratedPanels(
			pages=pack_pages(panels, target_pages),
			total_panels=len(panels),
			avg_panels_per_page=len(panels) / target_pages,
			style=style,
		)


def generate_panels_from_beat(
	beat: Beat,
	target_pages: int,
	style: str = "traditional",
	synthesizer: Optional[CompositionSynthesizer] = None,
) -> GeneratedPanels:
	return PanelGenerator(synthesizer).generate(beat, target_pages, style)
