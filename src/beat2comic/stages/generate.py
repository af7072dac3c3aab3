# -*- coding: utf-8 -*-
"""
beat2comic/stages/generate.py

目的：
- “分格生成阶段”：beat.json -> panels.json（GeneratedPanels）。
- 远程编排服务可用时用它设计构图；否则每格走确定性回退。

输入：
- ScriptPack/beat.json

输出：
- ScriptPack/panels.json
"""

from __future__ import annotations

import logging
from pathlib import Path

from beat2comic.core.io import ScriptPaths, read_json, write_json
from beat2comic.core.schemas import Beat
from beat2comic.pipeline.panel_generator import PanelGenerator
from beat2comic.providers.orchestration.mage_agent_client import load_mage_agent_client
from beat2comic.skills.compose_panel.skill import CompositionSynthesizer
from beat2comic.stages.base import StageContext


logger = logging.getLogger(__name__)


def find_project_root(start: Path) -> Path:
	"""向上查找含 .env 的目录；找不到就用 start。"""
	p = start.resolve()
	while p != p.parent:
		if (p / ".env").exists():
			return p
		p = p.parent
	return start.resolve()


class GenerateStage:
	name = "generate"

	def run(self, paths: ScriptPaths, ctx: StageContext) -> None:
		if not paths.beat.exists():
			raise FileNotFoundError(f"missing {paths.beat}")

		beat = Beat.from_dict(read_json(paths.beat))

		if not ctx.use_remote:
			generated = PanelGenerator(CompositionSynthesizer(client=None)).generate(
				beat, ctx.target_pages, ctx.style,
			)
		else:
			client = load_mage_agent_client(project_root=str(find_project_root(Path.cwd())))
			try:
				logger.info("using orchestration service at %s", client.cfg.base_url)
				generated = PanelGenerator(CompositionSynthesizer(client=client)).generate(
					beat, ctx.target_pages, ctx.style,
				)
			finally:
				client.close()

		write_json(paths.panels, generated.to_dict())
		logger.info("wrote %d panel(s) on %d page(s) to %s", generated.total_panels, len(generated.pages), paths.panels)
