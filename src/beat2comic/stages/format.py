# -*- coding: utf-8 -*-
"""
beat2comic/stages/format.py

目的：
- “排版阶段”：panels.json -> script.json / script.txt / validation.json。
- panels.json 可以是 generate 的输出，也可以是手写的页集
  （{"pages": [...]} 或直接是页数组）。

注意：
- 校验问题只写进 validation.json 并记 warning 日志，不会中断流程，也不会修改脚本。
"""

from __future__ import annotations

import logging

from beat2comic.core.exporter import export_as_json, export_as_text
from beat2comic.core.formatter import format_comic_script
from beat2comic.core.io import ScriptPaths, read_json, write_json
from beat2comic.core.schemas import ComicPage
from beat2comic.core.script_validator import validate_script
from beat2comic.stages.base import StageContext


logger = logging.getLogger(__name__)


def load_pages(data) -> list[ComicPage]:
	if isinstance(data, dict):
		if "pages" not in data:
			raise ValueError("panels document must contain 'pages'")
		data = data["pages"]

	if not isinstance(data, list):
		raise ValueError("pages must be a list")

	return [ComicPage.from_dict(p) for p in data]


class FormatStage:
	name = "format"

	def run(self, paths: ScriptPaths, ctx: StageContext) -> None:
		if not paths.panels.exists():
			raise FileNotFoundError(f"missing {paths.panels}")

		pages = load_pages(read_json(paths.panels))

		script = format_comic_script(
			title=ctx.title,
			issue_number=ctx.issue_number,
			writer=ctx.writer,
			pages=pages,
			artist=ctx.artist,
			date=ctx.date,
		)

		paths.script_json.write_text(export_as_json(script), encoding="utf-8")
		paths.script_txt.write_text(export_as_text(script), encoding="utf-8")

		result = validate_script(script)
		write_json(paths.validation, result.to_dict())

		for err in result.errors:
			logger.warning("script error: %s", err)
		for w in result.warnings:
			logger.info("script warning: %s", w)
