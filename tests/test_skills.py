# -*- coding: utf-8 -*-
"""compose_panel skill 测试：解析归一化、美术指导文字、远程失败回退。"""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from beat2comic.core.schemas import Lighting, Moment, PanelComposition, Point
from beat2comic.skills.compose_panel import ComposeConfig, CompositionSynthesizer
from beat2comic.skills.compose_panel.art_direction import build_art_direction
from beat2comic.skills.compose_panel.parser import parse_composition_response
from beat2comic.skills.compose_panel.prompt import build_context


class StubClient:
	"""记录调用参数，并返回固定响应。"""

	def __init__(self, response):
		self.response = response
		self.calls = []

	def orchestrate(self, task, context, max_agents, timeout_ms):
		self.calls.append(
			{"task": task, "context": context, "max_agents": max_agents, "timeout_ms": timeout_ms}
		)
		return self.response


class FailingClient:
	def __init__(self, exc):
		self.exc = exc

	def orchestrate(self, task, context, max_agents, timeout_ms):
		raise self.exc


def _moment():
	return Moment(
		description='Alice and Bob argue in the street. "Stop!"',
		characters=["Alice", "Bob"],
		action="fight",
		emotion="angry",
		importance=0.8,
		dialogue=["Stop!"],
	)


class TestParser:
	def test_snake_case_with_normalization(self):
		comp = parse_composition_response(json.dumps({"shot_type": "Close Up", "angle": "LOW ANGLE"}))
		assert comp.shot_type == "close-up"
		assert comp.angle == "low-angle"
		assert comp.perspective == "two-point"
		assert comp.focal_point == Point(0.5, 0.5)
		assert comp.lighting is None

	def test_unknown_vocab_falls_back_to_defaults(self):
		comp = parse_composition_response({"shotType": "spiral", "angle": "sideways", "perspective": "fisheye"})
		assert comp.shot_type == "medium-shot"
		assert comp.angle == "eye-level"
		assert comp.perspective == "two-point"

	def test_camel_case_focal_point_and_lighting_defaults(self):
		comp = parse_composition_response({"focalPoint": {"x": 0.2, "y": 1.7}, "lighting": {"type": "Noir"}})
		assert comp.focal_point == Point(0.2, 1.0)
		assert comp.lighting == Lighting(type="noir", direction=45.0, intensity=0.7)

	def test_zero_direction_is_kept(self):
		comp = parse_composition_response({"lighting": {"type": "dramatic", "direction": 0, "intensity": 0}})
		assert comp.lighting.direction == 0.0
		assert comp.lighting.intensity == 0.0

	def test_unparseable_raises(self):
		with pytest.raises(ValueError):
			parse_composition_response("not json at all")
		with pytest.raises(ValueError):
			parse_composition_response("[1, 2]")


class TestArtDirection:
	def test_style_opening_and_lighting(self):
		comp = PanelComposition(
			shot_type="close-up",
			angle="low-angle",
			lighting=Lighting(type="dramatic"),
		)
		assert build_art_direction(comp, "manga") == (
			"Manga style with screentones and speed lines. Close Up, Low Angle. dramatic lighting"
		)

	def test_unknown_style_uses_traditional_opening(self):
		comp = PanelComposition()
		assert build_art_direction(comp, "web_comic") == "Traditional American comic style. Medium Shot, Eye Level"


class TestCompositionSynthesizer:
	def test_success(self):
		payload = {"shotType": "extreme-close-up", "angle": "dutch-angle", "lighting": {"type": "noir"}}
		client = StubClient({"task_id": "t-1", "status": "completed", "result": json.dumps(payload)})
		syn = CompositionSynthesizer(client=client)

		res = syn.synthesize(_moment(), "european", 4)

		assert res.ok
		assert res.error == ""
		assert res.composition.shot_type == "extreme-close-up"
		assert res.art_direction.startswith("European BD style with detailed backgrounds. Extreme Close Up, Dutch Angle")
		assert [c.name for c in res.characters] == ["Alice", "Bob"]
		assert res.dialogue[0].shout is True

		call = client.calls[0]
		assert call["task"] == "design comic panel composition"
		assert call["max_agents"] == 2
		assert call["timeout_ms"] == 15000
		assert call["context"] == build_context(_moment(), "european", 4)

	def test_config_is_forwarded(self):
		client = StubClient({"result": {}})
		syn = CompositionSynthesizer(client=client, cfg=ComposeConfig(timeout_ms=500, max_agents=1))
		syn.synthesize(_moment(), "traditional", 1)
		assert client.calls[0]["timeout_ms"] == 500
		assert client.calls[0]["max_agents"] == 1

	def test_transport_error_falls_back(self, caplog):
		syn = CompositionSynthesizer(client=FailingClient(httpx.ConnectTimeout("timed out")))

		with caplog.at_level(logging.WARNING):
			res = syn.synthesize(_moment(), "traditional", 2)

		assert res.used_fallback is True
		assert "timed out" in res.error
		assert res.composition == PanelComposition(shot_type="medium-shot", angle="eye-level", perspective="two-point")
		assert res.art_direction == "Traditional American comic style. Medium Shot, Eye Level"
		# 人物/台词不依赖远程结果
		assert [c.facing for c in res.characters] == ["right", "left"]
		assert len(res.dialogue) == 1
		assert "composition fallback" in caplog.text

	def test_missing_result_falls_back(self):
		syn = CompositionSynthesizer(client=StubClient({"status": "completed"}))
		res = syn.synthesize(_moment(), "indie", 1)
		assert res.used_fallback is True
		assert "no result" in res.error

	def test_malformed_result_falls_back(self):
		syn = CompositionSynthesizer(client=StubClient({"result": "{{broken"}))
		res = syn.synthesize(_moment(), "indie", 1)
		assert res.used_fallback is True
		assert res.art_direction.startswith("Indie/alternative style")

	def test_no_client(self):
		res = CompositionSynthesizer().synthesize(_moment(), "traditional", 1)
		assert res.used_fallback is True
		assert res.error == "no orchestration client configured"
