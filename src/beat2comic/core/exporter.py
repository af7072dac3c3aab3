# -*- coding: utf-8 -*-
"""
core/exporter.py

这个文件做什么：
- export_as_text：行式纯文本脚本（封面横幅 + 每页 + 每格），给人直接阅读。
- export_as_json：完整 FormattedComicScript 的 indent=2 JSON。
- load_script_json：把 JSON 导出读回 FormattedComicScript（便于校验手改过的脚本）。
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from beat2comic.core.schemas import (
	ComicCharacter,
	Cover,
	Dialogue,
	FormattedComicPage,
	FormattedComicScript,
	FormattedPanel,
	PanelComposition,
	SoundEffect,
)


RULE = "═" * 47
PAGE_RULE = "─" * 45


def _hours(value: float) -> str:
	"""一位小数，整数去掉 .0（8.0 -> "8"，8.8 -> "8.8"），不用科学计数法。"""
	return f"{value:.1f}".removesuffix(".0")


def export_as_text(script: FormattedComicScript) -> str:
	lines: List[str] = []
	cover = script.cover

	lines.append(RULE)
	lines.append(f"  {cover.title.upper()}")
	lines.append(f"  ISSUE #{cover.issue_number}")
	lines.append("")
	lines.append(f"  Written by: {cover.writer}")
	if cover.artist:
		lines.append(f"  Art by: {cover.artist}")
	lines.append(f"  Date: {cover.date}")
	lines.append(RULE)
	lines.append("")
	lines.append(f"Total Pages: {script.total_pages}")
	lines.append(f"Total Panels: {script.total_panels}")
	lines.append(f"Dialogue Word Count: {script.dialogue_word_count}")
	lines.append(f"Estimated Art Time: {_hours(script.estimated_art_time_hours)} hours")
	lines.append("")
	lines.append(RULE)
	lines.append("")

	for page in script.pages:
		lines.append("")
		lines.append(f"PAGE {page.page_number} ({page.panel_count} PANELS)")
		lines.append(f"Layout: {page.layout_suggestion}")
		lines.append(PAGE_RULE)
		lines.append("")

		for panel in page.panels:
			lines.extend(_panel_lines(page.page_number, panel))

		lines.append("")

	return "\n".join(lines)


def _panel_lines(page_number: int, panel: FormattedPanel) -> List[str]:
	lines = [
		f"PANEL {page_number}.{panel.number} [{panel.size.upper()}]",
		"",
		"DESCRIPTION:",
		panel.description,
		"",
		"ART DIRECTION:",
		panel.art_direction,
		"",
	]

	if panel.location:
		lines.append(f"LOCATION: {panel.location}")
	if panel.time:
		lines.append(f"TIME: {panel.time}")

	if panel.captions:
		lines.append("")
		lines.extend(f"CAPTION: {c}" for c in panel.captions)

	if panel.dialogue:
		lines.append("")
		for d in panel.dialogue:
			off = " (OFF-PANEL)" if d.off_panel else ""
			lines.append(f"{d.character} {d.label}{off}:")
			lines.append(f'  "{d.text}"')

	if panel.sfx:
		lines.append("")
		lines.extend(f"SFX: {s.text} [{s.style}]" for s in panel.sfx)

	lines.append("")
	return lines


def export_as_json(script: FormattedComicScript) -> str:
	return json.dumps(script.to_dict(), ensure_ascii=False, indent=2)


def _panel_from_dict(data: Dict[str, Any]) -> FormattedPanel:
	return FormattedPanel(
		number=int(data.get("number", 0)),
		size=data.get("size") or "medium",
		description=data.get("description", ""),
		art_direction=data.get("art_direction", ""),
		composition=PanelComposition.from_dict(data.get("composition") or {}),
		characters=[ComicCharacter.from_dict(c) for c in data.get("characters", [])],
		location=data.get("location", ""),
		time=data.get("time"),
		captions=list(data.get("captions", [])),
		dialogue=[Dialogue.from_dict(d) for d in data.get("dialogue", [])],
		sfx=[SoundEffect.from_dict(s) for s in data.get("sfx", [])],
	)


def load_script_json(text: str) -> FormattedComicScript:
	"""
	从 export_as_json 的输出重建脚本。

	注意：
	- 页码/格号按文件里的值保留，不重新编号（校验要能看到问题）。
	- 汇总指标也按文件里的值保留。
	"""
	data = json.loads(text)
	if not isinstance(data, dict):
		raise ValueError("script must be a JSON object")

	for k in ("cover", "pages"):
		if k not in data:
			raise ValueError(f"missing key: {k}")

	c = data["cover"]
	pages = [
		FormattedComicPage(
			page_number=int(p.get("page_number", 0)),
			panel_count=int(p.get("panel_count", len(p.get("panels", [])))),
			layout_suggestion=p.get("layout_suggestion", ""),
			panels=[_panel_from_dict(x) for x in p.get("panels", [])],
		)
		for p in data["pages"]
	]

	return FormattedComicScript(
		cover=Cover(
			title=c.get("title", ""),
			issue_number=int(c.get("issue_number", 1)),
			writer=c.get("writer", ""),
			artist=c.get("artist") or "TBD",
			date=c.get("date", ""),
		),
		pages=pages,
		total_pages=int(data.get("total_pages", len(pages))),
		total_panels=int(data.get("total_panels", sum(len(p.panels) for p in pages))),
		dialogue_word_count=int(data.get("dialogue_word_count", 0)),
		estimated_art_time_hours=float(data.get("estimated_art_time_hours", 0.0)),
	)
