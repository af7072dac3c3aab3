# -*- coding: utf-8 -*-
"""
beat2comic/stages/base.py

目的：
- 定义 Stage 的“接口形状”和运行上下文 StageContext。
- 每个阶段都遵循同一种调用方式：run(paths, ctx)。

为什么需要：
- pipeline/orchestrator 只负责按顺序调度 stage，
  它不应该知道 stage 的内部细节。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from beat2comic.core.io import ScriptPaths


@dataclass
class StageContext:
	"""
	运行上下文：
	- title/issue_number/writer/artist/date：封面信息（format 阶段用）
	- style/target_pages：生成参数（generate 阶段用）
	- use_remote：是否调用远程编排服务；False 时全部走确定性回退
	"""
	title: str
	writer: str
	issue_number: int = 1
	artist: Optional[str] = None
	date: Optional[str] = None
	style: str = "traditional"
	target_pages: int = 1
	use_remote: bool = True


class Stage(Protocol):
	"""
	Stage 接口（协议）：
	- name：阶段名
	- run：执行该阶段，负责读写 ScriptPack 内的文件
	"""
	name: str

	def run(self, paths: ScriptPaths, ctx: StageContext) -> None:
		...
