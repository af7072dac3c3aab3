# -*- coding: utf-8 -*-
"""
beat2comic/pipeline/orchestrator.py

目的：
- 作为“阶段调度器”：按固定顺序执行各个 stage（generate -> format）。
- 支持 `run_until(..., until="generate")`：跑到指定阶段停止。
- 支持从 format 开始：ScriptPack 里没有 beat.json、只有手写的 panels.json 时，
  跳过 generate。

注意：
- orchestrator 不关心任何具体业务（如何分格、如何调用远程服务）。
- orchestrator 只负责：创建 paths、按顺序调用 stage、打印状态。
"""

from __future__ import annotations

from beat2comic.core.io import script_paths
from beat2comic.stages.base import StageContext
from beat2comic.stages.format import FormatStage
from beat2comic.stages.generate import GenerateStage


STAGE_ORDER = [
	"generate",
	"format",
]


def run_until(pack_dir: str, ctx: StageContext, until: str) -> None:
	if until not in STAGE_ORDER:
		raise ValueError(f"unknown stage: {until}")

	paths = script_paths(pack_dir)
	paths.ensure_dirs()

	stages = {
		"generate": GenerateStage(),
		"format": FormatStage(),
	}

	for name in STAGE_ORDER:
		# 手写页集：没有 beat.json 但已有 panels.json，直接排版
		if name == "generate" and not paths.beat.exists() and paths.panels.exists():
			print("[INFO] no beat.json; using existing panels.json")
		else:
			print(f"[RUN] stage={name}")
			stages[name].run(paths, ctx)

		if name == until:
			break

	if paths.validation.exists() and until == "format":
		print(f"[OK] script written: {paths.script_txt}")
