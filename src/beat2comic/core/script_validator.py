# -*- coding: utf-8 -*-
"""
core/script_validator.py

这个文件做什么：
- 对 FormattedComicScript 做完整性 / 节奏检查。
- 只报告，不修改脚本。

errors（任何一条都使 valid=False）：
- 缺标题、缺作者、没有页
- 页码与位置不一致

warnings（不影响 valid）：
- 空页、缺描述的格、无字格（silent panel）
- 平均每页格数 > 8（偏赶）；< 4（偏慢）只对两页及以上的脚本判断
"""

from __future__ import annotations

from beat2comic.core.schemas import FormattedComicScript, ValidationResult


MIN_PANELS_PER_PAGE = 4
MAX_PANELS_PER_PAGE = 8
MIN_PAGES_FOR_PACING = 2


def validate_script(script: FormattedComicScript) -> ValidationResult:
	res = ValidationResult()

	if not script.cover.title:
		res.errors.append("Missing title")
	if not script.cover.writer:
		res.errors.append("Missing writer")
	if not script.pages:
		res.errors.append("No pages in script")

	for i, page in enumerate(script.pages):
		if page.page_number != i + 1:
			res.errors.append(f"Page numbering issue at page {i + 1}")

		if not page.panels:
			res.warnings.append(f"Page {page.page_number} has no panels")

		for panel in page.panels:
			ref = f"{page.page_number}.{panel.number}"
			if not panel.description:
				res.warnings.append(f"Panel {ref} missing description")
			if not panel.dialogue and not panel.captions:
				res.warnings.append(f"Panel {ref} has no text (silent panel)")

	density = script.total_panels / script.total_pages if script.total_pages else 0.0
	if script.total_pages >= MIN_PAGES_FOR_PACING and density < MIN_PANELS_PER_PAGE:
		res.warnings.append("Low panel density - may feel slow paced")
	if density > MAX_PANELS_PER_PAGE:
		res.warnings.append("High panel density - may feel rushed")

	return res
