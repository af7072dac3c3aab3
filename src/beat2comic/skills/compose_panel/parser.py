# -*- coding: utf-8 -*-
"""
compose_panel/parser.py

这个文件做什么：
- 把远程返回的 result（JSON 字符串或 dict）解析成 PanelComposition。

规则：
- 所有字段都是可选的：缺失或形状不对时用默认值，不报错
  - shot_type|shotType 不在词表 -> medium-shot
  - angle 不在词表 -> eye-level
  - perspective 缺失/不在词表 -> two-point
  - focal_point|focalPoint 缺失/坏掉 -> (0.5, 0.5)
  - lighting 缺字段 -> natural / 45 / 0.7
- 只有“整体不可解析”（不是 JSON、不是对象）才 raise，让上层回退。
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from beat2comic.core.schemas import Lighting, PanelComposition, Point
from beat2comic.core.schemas.panel import (
	DEFAULT_PERSPECTIVE,
	LIGHTING_TYPES,
	PERSPECTIVES,
	normalize_camera_angle,
	normalize_shot_type,
)


def _clamp01(v: float) -> float:
	return max(0.0, min(1.0, v))


def load_payload(result: Any) -> Dict[str, Any]:
	if isinstance(result, (str, bytes)):
		try:
			result = json.loads(result)
		except Exception:
			snip = result if len(result) <= 200 else result[:200] + "...(truncated)"
			raise ValueError(f"composition result is not valid JSON: {snip!r}")

	if not isinstance(result, dict):
		raise ValueError(f"composition result must be a JSON object, got {type(result).__name__}")

	return result


def parse_focal_point(raw: Any) -> Point:
	if not isinstance(raw, dict):
		return Point(0.5, 0.5)
	try:
		return Point(x=_clamp01(float(raw.get("x", 0.5))), y=_clamp01(float(raw.get("y", 0.5))))
	except (TypeError, ValueError):
		return Point(0.5, 0.5)


def parse_lighting(raw: Any) -> Optional[Lighting]:
	if not isinstance(raw, dict):
		return None

	kind = str(raw.get("type") or "natural").strip().lower()
	if kind not in LIGHTING_TYPES:
		kind = "natural"

	# 0° / 0.0 是合法值，只有缺失才取默认
	try:
		direction = float(raw["direction"]) if raw.get("direction") is not None else 45.0
	except (TypeError, ValueError):
		direction = 45.0

	try:
		intensity = _clamp01(float(raw["intensity"])) if raw.get("intensity") is not None else 0.7
	except (TypeError, ValueError):
		intensity = 0.7

	return Lighting(type=kind, direction=direction, intensity=intensity)


def parse_composition_response(result: Any) -> PanelComposition:
	data = load_payload(result)

	perspective = str(data.get("perspective") or DEFAULT_PERSPECTIVE).strip().lower()
	if perspective not in PERSPECTIVES:
		perspective = DEFAULT_PERSPECTIVE

	return PanelComposition(
		shot_type=normalize_shot_type(data.get("shot_type") or data.get("shotType") or ""),
		angle=normalize_camera_angle(data.get("angle") or ""),
		perspective=perspective,
		focal_point=parse_focal_point(data.get("focal_point") or data.get("focalPoint")),
		lighting=parse_lighting(data.get("lighting")),
	)
