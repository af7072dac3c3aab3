# -*- coding: utf-8 -*-
"""
compose_panel/art_direction.py

生成器阶段的美术指导文字（成功/回退共用一套规则）：
  <风格开场句>. <ShotType>, <Angle>[. <lighting> lighting]
"""

from __future__ import annotations

from beat2comic.core.assembler import humanize
from beat2comic.core.schemas import PanelComposition


STYLE_OPENINGS = {
	"manga": "Manga style with screentones and speed lines",
	"european": "European BD style with detailed backgrounds",
	"indie": "Indie/alternative style with experimental layouts",
}
DEFAULT_OPENING = "Traditional American comic style"


def build_art_direction(composition: PanelComposition, style: str) -> str:
	directions = [
		STYLE_OPENINGS.get(style, DEFAULT_OPENING),
		f"{humanize(composition.shot_type)}, {humanize(composition.angle)}",
	]

	if composition.lighting is not None:
		directions.append(f"{composition.lighting.type} lighting")

	return ". ".join(directions)
