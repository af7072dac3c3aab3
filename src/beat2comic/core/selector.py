# -*- coding: utf-8 -*-
"""
core/selector.py

按重要度挑选 moments：
- 数量不超过 target_count：原样返回
- 否则：按 importance 降序取前 target_count，再恢复叙事顺序

并列规则：
- importance 相同时，原始位置靠前的优先入选（排序键 (-importance, index)），
  不依赖排序稳定性。
"""

from __future__ import annotations

from typing import List

from beat2comic.core.schemas import Moment


def select_moments(moments: List[Moment], target_count: int) -> List[Moment]:
	if len(moments) <= target_count:
		return moments

	ranked = sorted(range(len(moments)), key=lambda i: (-moments[i].importance, i))
	keep = sorted(ranked[:max(target_count, 0)])
	return [moments[i] for i in keep]
