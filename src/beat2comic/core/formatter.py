# -*- coding: utf-8 -*-
"""
core/formatter.py

这个文件做什么：
- ComicPage 列表 + 封面信息 -> FormattedComicScript。
- 纯函数、确定性：相同输入（含 date）得到相同输出。

派生指标：
- dialogue_word_count：所有台词 text + 所有 caption 的空白分词数
- estimated_art_time_hours：每页 4 + 0.5*格数 + 0.25*人物出场数 + 1*精绘格数，
  精绘格 = establishing-shot 或 full-page / double-page-spread；
  全部页相加后四舍五入（half-up）到一位小数

注意：
- 页码、格号按位置重新编号（page_number = i+1，格号 = 页内 i+1）。
- 美术指导文字由 panel 数据重新生成，见 build_panel_art_direction。
"""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from beat2comic.core.assembler import humanize
from beat2comic.core.schemas import (
	ComicPage,
	ComicPanel,
	Cover,
	FormattedComicPage,
	FormattedComicScript,
	FormattedPanel,
)


LAYOUTS = {
	1: "Full-page splash panel",
	2: "Horizontal split (2 rows) or vertical split (2 columns)",
	3: "Tier system: 1 large panel top, 2 smaller bottom",
	4: "2x2 grid or tier system",
	5: "Tier system: 2 top, 3 bottom or staggered layout",
	6: "2x3 grid (classic comic page) or 3x2 tier system",
	7: "Staggered layout with varying panel sizes",
	8: "2x4 grid or complex staggered layout",
	9: "3x3 grid or tiered layout with emphasis panels",
}

BASE_PAGE_HOURS = 4.0
HOURS_PER_PANEL = 0.5
HOURS_PER_CHARACTER = 0.25
HOURS_PER_DETAILED_PANEL = 1.0
DETAILED_SIZES = ("full-page", "double-page-spread")


def suggest_layout(panel_count: int) -> str:
	return LAYOUTS.get(panel_count, f"Custom layout with {panel_count} panels - varies sizes for pacing")


def count_words(text: str) -> int:
	return len(text.split())


def count_dialogue_words(pages: List[ComicPage]) -> int:
	total = 0
	for page in pages:
		for panel in page.panels:
			total += sum(count_words(d.text) for d in panel.dialogue)
			total += sum(count_words(c) for c in panel.captions)
	return total


def is_detailed(panel: ComicPanel) -> bool:
	return panel.composition.shot_type == "establishing-shot" or panel.size in DETAILED_SIZES


def page_art_hours(page: ComicPage) -> float:
	appearances = sum(len(p.characters) for p in page.panels)
	detailed = sum(1 for p in page.panels if is_detailed(p))
	return (
		BASE_PAGE_HOURS
		+ HOURS_PER_PANEL * len(page.panels)
		+ HOURS_PER_CHARACTER * appearances
		+ HOURS_PER_DETAILED_PANEL * detailed
	)


def estimate_art_time(pages: List[ComicPage]) -> float:
	total = sum(page_art_hours(p) for p in pages)
	return float(Decimal(str(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _percent(v: float) -> int:
	return int(Decimal(str(v * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_panel_art_direction(panel: ComicPanel) -> str:
	comp = panel.composition
	directions = [f"{humanize(comp.shot_type)} shot, {humanize(comp.angle)} angle"]

	if comp.perspective:
		directions.append(f"{comp.perspective} perspective")

	if comp.lighting is not None:
		directions.append(f"{humanize(comp.lighting.type)} lighting from {comp.lighting.direction:g}°")

	if panel.characters:
		chars = ", ".join(f"{c.name} {c.pose} ({c.facing}-facing)" for c in panel.characters)
		directions.append(f"Characters: {chars}")

	directions.append(f"Focus on {_percent(comp.focal_point.x)}%, {_percent(comp.focal_point.y)}% of frame")

	if panel.border_style and panel.border_style != "standard":
		directions.append(f"{humanize(panel.border_style)} border")

	if panel.bleed_type and panel.bleed_type != "none":
		directions.append(f"{humanize(panel.bleed_type)} bleed")

	return ". ".join(directions)


def format_panel(panel: ComicPanel, panel_number: int) -> FormattedPanel:
	return FormattedPanel(
		number=panel_number,
		size=panel.size or "medium",
		description=panel.description,
		art_direction=build_panel_art_direction(panel),
		composition=panel.composition,
		characters=list(panel.characters),
		location=panel.location,
		time=panel.time,
		captions=list(panel.captions),
		dialogue=list(panel.dialogue),
		sfx=list(panel.sfx),
	)


def format_page(page: ComicPage, page_number: int) -> FormattedComicPage:
	return FormattedComicPage(
		page_number=page_number,
		panel_count=len(page.panels),
		layout_suggestion=page.layout_suggestion or suggest_layout(len(page.panels)),
		panels=[format_panel(p, i + 1) for i, p in enumerate(page.panels)],
	)


def format_comic_script(
	title: str,
	issue_number: int,
	writer: str,
	pages: List[ComicPage],
	artist: Optional[str] = None,
	date: Optional[str] = None,
) -> FormattedComicScript:
	cover = Cover(
		title=title,
		issue_number=issue_number,
		writer=writer,
		artist=artist or "TBD",
		date=date or dt.date.today().isoformat(),
	)

	return FormattedComicScript(
		cover=cover,
		pages=[format_page(p, i + 1) for i, p in enumerate(pages)],
		total_pages=len(pages),
		total_panels=sum(len(p.panels) for p in pages),
		dialogue_word_count=count_dialogue_words(pages),
		estimated_art_time_hours=estimate_art_time(pages),
	)
