# -*- coding: utf-8 -*-
"""
beat2comic/core/io.py

目的：
- 统一管理 ScriptPack 的路径约定（哪些文件放哪里）。
- 提供 JSON 读写的小工具。

为什么要做这层：
- 避免各个 stage 到处手写路径字符串。
- 一旦 ScriptPack 目录结构要调整，只改这里。

ScriptPack 约定（v0.1）：
- beat.json        : 输入 Beat（generate 阶段读取）
- panels.json      : GeneratedPanels（generate 输出；也可以是手写的页集，直接从 format 开始）
- script.json      : FormattedComicScript（JSON 导出）
- script.txt       : 纯文本脚本
- validation.json  : 校验结果
- logs/            : 日志
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ScriptPaths:
	"""
	ScriptPack 内部常用文件路径。

	注意：
	- 只存路径，不做读写。
	- ensure_dirs() 负责创建目录骨架。
	"""
	root: Path
	beat: Path
	panels: Path
	script_json: Path
	script_txt: Path
	validation: Path
	logs_dir: Path

	def ensure_dirs(self) -> None:
		# 重复执行必须安全
		for d in (self.root, self.logs_dir):
			d.mkdir(parents=True, exist_ok=True)


def script_paths(pack_dir: str | Path) -> ScriptPaths:
	root = Path(pack_dir)

	return ScriptPaths(
		root=root,
		beat=root / "beat.json",
		panels=root / "panels.json",
		script_json=root / "script.json",
		script_txt=root / "script.txt",
		validation=root / "validation.json",
		logs_dir=root / "logs",
	)


def read_json(path: Path) -> Any:
	try:
		return json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as e:
		raise ValueError(f"invalid JSON in {path}: {e}") from e


def write_json(path: Path, data: Any) -> None:
	path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
