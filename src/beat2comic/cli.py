# -*- coding: utf-8 -*-
"""
beat2comic/cli.py

目的：
- 提供项目的命令行入口。
- init：创建 ScriptPack 目录骨架，并写一个 beat.json 模板。
- run：调用 pipeline/orchestrator.py 运行若干 stage（支持 --until），日志另写一份到 logs/run.log。
- validate：校验一个已有的 script.json（无效时退出码 1）。

注意：
- CLI 不做业务细节：不切句、不调用远程服务。
- CLI 只负责参数解析 + 日志配置 + 把任务交给 orchestrator。
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from beat2comic.core.schemas import COMIC_STYLES

STAGES = [
	"generate",
	"format",
]


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
RUN_LOG_NAME = "run.log"


def setup_logging(verbose: bool = False) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.INFO,
		format=LOG_FORMAT,
		handlers=[logging.StreamHandler(sys.stdout)],
	)

	# 第三方库的请求日志太吵
	logging.getLogger("httpx").setLevel(logging.WARNING)
	logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="beat2comic",
		description="Narrative beat -> comic-book script (panels, pages, formatted script)",
	)
	p.add_argument("--verbose", action="store_true", help="DEBUG 级别日志")

	sub = p.add_subparsers(dest="cmd", required=True)

	initp = sub.add_parser("init", help="Create an empty ScriptPack with a beat.json template")
	initp.add_argument("--pack_dir", required=True, help="e.g. output/issue_001/beat_01")

	runp = sub.add_parser("run", help="Run pipeline for an existing ScriptPack")
	runp.add_argument("--pack_dir", required=True)
	runp.add_argument("--until", default="format", choices=STAGES)
	runp.add_argument("--title", default="Untitled")
	runp.add_argument("--writer", default="")
	runp.add_argument("--artist", default=None)
	runp.add_argument("--issue", type=int, default=1)
	runp.add_argument("--date", default=None, help="封面日期 YYYY-MM-DD，缺省为今天")
	runp.add_argument("--style", default="traditional", choices=COMIC_STYLES)
	runp.add_argument("--pages", type=int, default=1, help="目标页数")
	runp.add_argument("--offline", action="store_true", help="不调用远程编排服务，全部走回退构图")

	valp = sub.add_parser("validate", help="Validate an exported script.json")
	valp.add_argument("--script", required=True)

	return p


def cmd_init(pack_dir: str) -> None:
	from beat2comic.core.io import script_paths, write_json
	from beat2comic.core.schemas import Beat

	paths = script_paths(pack_dir)
	paths.ensure_dirs()

	# 已有 beat.json 不覆盖
	if not paths.beat.exists():
		write_json(paths.beat, Beat(description="").to_dict())

	print(f"[OK] ScriptPack skeleton created: {paths.root}")


def attach_pack_log(logs_dir: Path) -> logging.Handler:
	"""把本次运行的日志同时写到 ScriptPack/logs/run.log（追加）。"""
	handler = logging.FileHandler(logs_dir / RUN_LOG_NAME, encoding="utf-8")
	handler.setFormatter(logging.Formatter(LOG_FORMAT))
	logging.getLogger().addHandler(handler)
	return handler


def cmd_run(args: argparse.Namespace) -> None:
	from beat2comic.core.io import script_paths
	from beat2comic.pipeline.orchestrator import run_until
	from beat2comic.stages.base import StageContext

	ctx = StageContext(
		title=args.title,
		writer=args.writer,
		issue_number=args.issue,
		artist=args.artist,
		date=args.date,
		style=args.style,
		target_pages=args.pages,
		use_remote=not args.offline,
	)

	paths = script_paths(args.pack_dir)
	paths.ensure_dirs()

	handler = attach_pack_log(paths.logs_dir)
	try:
		run_until(pack_dir=args.pack_dir, ctx=ctx, until=args.until)
	finally:
		logging.getLogger().removeHandler(handler)
		handler.close()


def cmd_validate(script_path: str) -> int:
	from beat2comic.core.exporter import load_script_json
	from beat2comic.core.script_validator import validate_script

	script = load_script_json(Path(script_path).read_text(encoding="utf-8"))
	result = validate_script(script)

	for e in result.errors:
		print(f"[ERROR] {e}")
	for w in result.warnings:
		print(f"[WARN] {w}")

	print(f"[OK] valid={result.valid}")
	return 0 if result.valid else 1


def main(argv=None) -> None:
	args = build_parser().parse_args(argv)
	setup_logging(args.verbose)

	if args.cmd == "init":
		cmd_init(args.pack_dir)
		return

	if args.cmd == "run":
		cmd_run(args)
		return

	if args.cmd == "validate":
		code = cmd_validate(args.script)
		if code:
			sys.exit(code)
		return
