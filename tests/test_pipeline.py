# -*- coding: utf-8 -*-
"""生成流水线 + ScriptPack 阶段调度 + CLI 测试（全部离线）。"""

from __future__ import annotations

import json
import threading

import pytest

from beat2comic.cli import main
from beat2comic.core.io import read_json, script_paths, write_json
from beat2comic.core.schemas import Beat, Moment
from beat2comic.pipeline.orchestrator import run_until
from beat2comic.pipeline.panel_generator import PanelGenerator, generate_panels_from_beat
from beat2comic.skills.compose_panel import CompositionSynthesizer
from beat2comic.stages.base import StageContext


BEAT_TEXT = 'Alice runs down the street. Bob whispers "over here". A loud bang shakes the building.'


class RecordingClient:
	def __init__(self):
		self.panel_numbers = []

	def orchestrate(self, task, context, max_agents, timeout_ms):
		self.panel_numbers.append(context["panel_number"])
		return {"status": "completed", "result": {"shotType": "close-up", "angle": "low-angle"}}


def _ctx(**kw):
	kw.setdefault("title", "Night Shift")
	kw.setdefault("writer", "Sam Rivera")
	kw.setdefault("date", "2024-05-01")
	kw.setdefault("use_remote", False)
	return StageContext(**kw)


class TestPanelGenerator:
	def test_offline_generation(self):
		out = generate_panels_from_beat(Beat(description=BEAT_TEXT), target_pages=1)

		assert out.total_panels == 3
		assert out.avg_panels_per_page == 3.0
		assert out.style == "traditional"
		assert len(out.pages) == 1

		panels = out.pages[0].panels
		assert [p.number for p in panels] == [1, 2, 3]
		# 回退时描述就是原句
		assert panels[0].description == "Alice runs down the street"
		assert panels[0].location == "street"
		assert panels[0].characters[0].pose == "running"
		assert panels[1].dialogue[0].character == "Bob"
		assert panels[2].sfx[0].text == "BANG"
		assert all(p.composition.shot_type == "medium-shot" for p in panels)

	def test_remote_composition_in_narrative_order(self):
		client = RecordingClient()
		out = generate_panels_from_beat(
			Beat(description=BEAT_TEXT),
			target_pages=1,
			style="manga",
			synthesizer=CompositionSynthesizer(client=client),
		)

		assert client.panel_numbers == [1, 2, 3]
		first = out.pages[0].panels[0]
		assert first.description == "Close Up of Alice Alice runs down the street"
		assert first.art_direction == "Manga style with screentones and speed lines. Close Up, Low Angle"

	def test_selection_respects_page_budget(self):
		importances = [0.1, 0.9, 0.2, 0.8, 0.3, 0.7, 0.6, 0.5]
		beat = Beat(
			description="",
			moments=[Moment(description=f"m{i}", importance=v) for i, v in enumerate(importances)],
		)
		out = generate_panels_from_beat(beat, target_pages=1)
		assert out.total_panels == 6
		assert [p.description for p in out.pages[0].panels] == ["m1", "m3", "m4", "m5", "m6", "m7"]

	def test_multi_page(self):
		beat = Beat(description="", moments=[Moment(description=f"m{i}") for i in range(10)])
		out = generate_panels_from_beat(beat, target_pages=2)
		assert [len(p.panels) for p in out.pages] == [5, 5]
		assert out.avg_panels_per_page == 5.0

	def test_cancel_stops_remote_calls(self):
		client = RecordingClient()
		cancel = threading.Event()
		cancel.set()

		gen = PanelGenerator(CompositionSynthesizer(client=client))
		out = gen.generate(Beat(description=BEAT_TEXT), 1, cancel_event=cancel)

		assert client.panel_numbers == []
		assert out.total_panels == 3
		assert [p.description for p in out.pages[0].panels][0] == "Alice runs down the street"

	def test_invalid_arguments(self):
		beat = Beat(description=BEAT_TEXT)
		with pytest.raises(ValueError, match="target_pages"):
			generate_panels_from_beat(beat, target_pages=0)
		with pytest.raises(ValueError, match="unknown style"):
			generate_panels_from_beat(beat, target_pages=1, style="noir")

	def test_beat_requires_content(self):
		with pytest.raises(ValueError):
			Beat.from_dict({"tone": "dark"})


class TestOrchestrator:
	def test_end_to_end_offline(self, tmp_path):
		pack = tmp_path / "issue_001" / "beat_01"
		paths = script_paths(pack)
		paths.ensure_dirs()
		write_json(paths.beat, {"description": BEAT_TEXT, "beat_number": 1})

		run_until(str(pack), _ctx(), until="format")

		generated = read_json(paths.panels)
		assert generated["total_panels"] == 3

		script = read_json(paths.script_json)
		assert script["cover"]["title"] == "Night Shift"
		assert script["cover"]["artist"] == "TBD"
		assert script["total_panels"] == 3

		text = paths.script_txt.read_text(encoding="utf-8")
		assert "  NIGHT SHIFT" in text
		assert "PAGE 1 (3 PANELS)" in text

		validation = read_json(paths.validation)
		assert validation["valid"] is True

	def test_until_generate_stops_early(self, tmp_path):
		paths = script_paths(tmp_path)
		write_json(paths.beat, {"description": BEAT_TEXT})

		run_until(str(tmp_path), _ctx(), until="generate")

		assert paths.panels.exists()
		assert not paths.script_json.exists()

	def test_format_from_authored_pages(self, tmp_path):
		paths = script_paths(tmp_path)
		pages = [
			{
				"pageNumber": 1,
				"panels": [
					{"number": 1, "size": "large", "description": "Rooftop at dusk", "captions": ["Later."]},
				],
			}
		]
		write_json(paths.panels, pages)

		run_until(str(tmp_path), _ctx(), until="format")

		script = read_json(paths.script_json)
		assert script["pages"][0]["layout_suggestion"] == "Full-page splash panel"
		assert read_json(paths.validation) == {"valid": True, "errors": [], "warnings": []}

	def test_missing_writer_is_reported(self, tmp_path):
		paths = script_paths(tmp_path)
		write_json(paths.beat, {"description": BEAT_TEXT})

		run_until(str(tmp_path), _ctx(writer=""), until="format")

		validation = read_json(paths.validation)
		assert validation["valid"] is False
		assert validation["errors"] == ["Missing writer"]

	def test_unknown_stage(self, tmp_path):
		with pytest.raises(ValueError, match="unknown stage"):
			run_until(str(tmp_path), _ctx(), until="render")

	def test_missing_inputs(self, tmp_path):
		with pytest.raises(FileNotFoundError):
			run_until(str(tmp_path), _ctx(), until="format")


class TestCli:
	def test_init_writes_template_once(self, tmp_path):
		pack = tmp_path / "pack"
		main(["init", "--pack_dir", str(pack)])
		assert json.loads((pack / "beat.json").read_text(encoding="utf-8"))["description"] == ""

		(pack / "beat.json").write_text('{"description": "Kept."}', encoding="utf-8")
		main(["init", "--pack_dir", str(pack)])
		assert json.loads((pack / "beat.json").read_text(encoding="utf-8"))["description"] == "Kept."

	def test_run_offline(self, tmp_path):
		write_json(tmp_path / "beat.json", {"description": BEAT_TEXT})
		main([
			"run", "--pack_dir", str(tmp_path), "--title", "Night Shift", "--writer", "Sam",
			"--style", "indie", "--pages", "1", "--offline",
		])
		script = read_json(tmp_path / "script.json")
		assert script["pages"][0]["panels"][0]["art_direction"].startswith("Medium Shot shot, Eye Level angle")

		# 回退告警同时写进 ScriptPack 的 logs/run.log
		run_log = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
		assert "panel 1: composition fallback" in run_log

	def test_validate_exit_codes(self, tmp_path):
		write_json(tmp_path / "beat.json", {"description": BEAT_TEXT})
		run_until(str(tmp_path), _ctx(), until="format")
		main(["validate", "--script", str(tmp_path / "script.json")])

		data = read_json(tmp_path / "script.json")
		data["cover"]["title"] = ""
		write_json(tmp_path / "broken.json", data)
		with pytest.raises(SystemExit) as exc:
			main(["validate", "--script", str(tmp_path / "broken.json")])
		assert exc.value.code == 1
