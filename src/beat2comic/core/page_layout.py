# -*- coding: utf-8 -*-
"""
core/page_layout.py

把 panel 列表按顺序切成页：
- 每页格数 = ceil(总格数 / target_pages)
- 简单顺序切片，不做按内容的重排
- 页码从 1 开始；每页内 panel number 重新从 1 编号（不修改入参对象）
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import List

from beat2comic.core.schemas import ComicPage, ComicPanel


def pack_pages(panels: List[ComicPanel], target_pages: int) -> List[ComicPage]:
	if target_pages < 1:
		raise ValueError(f"target_pages must be >= 1, got {target_pages}")

	if not panels:
		return []

	per_page = math.ceil(len(panels) / target_pages)
	pages: List[ComicPage] = []

	for start in range(0, len(panels), per_page):
		chunk = panels[start:start + per_page]
		pages.append(
			ComicPage(
				page_number=len(pages) + 1,
				panels=[replace(p, number=i + 1) for i, p in enumerate(chunk)],
			)
		)

	return pages
