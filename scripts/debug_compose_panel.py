# -*- coding: utf-8 -*-
"""
scripts/debug_compose_panel.py

这个脚本做什么：
- 读取一个 beat 文本（默认 docs/beat.txt，或直接用 --text）
- 切句打标 -> moments，按页数预算挑选
- 先做一次 health_check，再逐格调用 compose_panel skill（通过 MageAgent）
- 打印：
  1) 服务是否健康 + 延迟
  2) moment 数 / 选中数
  3) 每一格是否 fallback、失败原因、镜头/角度、美术指导文字

使用方式：
1) 在项目根目录创建 .env（并确保 .gitignore 忽略它）：
   MAGEAGENT_URL=http://localhost:8080
   MAGEAGENT_API_KEY=xxx
2) 运行：
   python scripts/debug_compose_panel.py --text "Alice runs. Bob shouts."
"""

from __future__ import annotations

import argparse

from beat2comic.core.moments import extract_moments
from beat2comic.core.schemas import COMIC_STYLES, Beat
from beat2comic.core.selector import select_moments
from beat2comic.providers.orchestration import load_mage_agent_client
from beat2comic.skills.compose_panel import ComposeConfig, CompositionSynthesizer


def build_argparser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser()
	p.add_argument("--in_path", default="docs/beat.txt", help="输入 beat 文本路径（UTF-8）")
	p.add_argument("--text", default=None, help="直接给 beat 文本，优先于 --in_path")
	p.add_argument("--style", default="traditional", choices=COMIC_STYLES)
	p.add_argument("--pages", type=int, default=1)
	p.add_argument("--timeout_ms", type=int, default=15000)
	return p


def main() -> None:
	args = build_argparser().parse_args()

	if args.text is not None:
		text = args.text
	else:
		with open(args.in_path, "r", encoding="utf-8") as f:
			text = f.read()

	moments = extract_moments(Beat(description=text))
	selected = select_moments(moments, args.pages * 6)
	print(f"[moments] total={len(moments)} selected={len(selected)}")

	client = load_mage_agent_client(project_root=".")
	try:
		h = client.health_check()
		print(f"[health] url={client.cfg.base_url} healthy={h['healthy']} latency_ms={h['latency_ms']:.0f}")

		syn = CompositionSynthesizer(client=client, cfg=ComposeConfig(timeout_ms=args.timeout_ms))
		for i, m in enumerate(selected):
			res = syn.synthesize(m, args.style, i + 1)
			comp = res.composition
			print(f"{i + 1:03d} fallback={res.used_fallback} {comp.shot_type}/{comp.angle} imp={m.importance}")
			if res.used_fallback:
				print(f"    error={res.error}")
			print(f"    {res.art_direction}")

	finally:
		client.close()


if __name__ == "__main__":
	main()
