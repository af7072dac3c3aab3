# -*- coding: utf-8 -*-
"""
beat2comic/core/schemas/script.py

FormattedComicScript：排版阶段的终态产物。
- 构造后不再修改（frozen），只会被导出（text/JSON）或校验。
- 四个汇总指标（总页数/总格数/台词字数/预计作画工时）都是 pages 的纯函数，
  由 formatter 计算后一次性写入。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .panel import ComicCharacter, Dialogue, PanelComposition, SoundEffect


@dataclass(frozen=True)
class Cover:
	title: str
	issue_number: int
	writer: str
	artist: str
	date: str

	def to_dict(self) -> Dict[str, Any]:
		return {
			"title": self.title,
			"issue_number": self.issue_number,
			"writer": self.writer,
			"artist": self.artist,
			"date": self.date,
		}


@dataclass(frozen=True)
class FormattedPanel:
	number: int
	size: str
	description: str
	art_direction: str
	composition: PanelComposition
	characters: List[ComicCharacter]
	location: str
	time: Optional[str]
	captions: List[str]
	dialogue: List[Dialogue]
	sfx: List[SoundEffect]

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"number": self.number,
			"size": self.size,
			"description": self.description,
			"art_direction": self.art_direction,
			"composition": self.composition.to_dict(),
			"characters": [c.to_dict() for c in self.characters],
			"location": self.location,
		}
		if self.time is not None:
			d["time"] = self.time
		d["captions"] = list(self.captions)
		d["dialogue"] = [x.to_dict() for x in self.dialogue]
		d["sfx"] = [x.to_dict() for x in self.sfx]
		return d


@dataclass(frozen=True)
class FormattedComicPage:
	page_number: int
	panel_count: int
	layout_suggestion: str
	panels: List[FormattedPanel]

	def to_dict(self) -> Dict[str, Any]:
		return {
			"page_number": self.page_number,
			"panel_count": self.panel_count,
			"layout_suggestion": self.layout_suggestion,
			"panels": [p.to_dict() for p in self.panels],
		}


@dataclass(frozen=True)
class FormattedComicScript:
	cover: Cover
	pages: List[FormattedComicPage]
	total_pages: int
	total_panels: int
	dialogue_word_count: int
	estimated_art_time_hours: float

	def to_dict(self) -> Dict[str, Any]:
		return {
			"cover": self.cover.to_dict(),
			"pages": [p.to_dict() for p in self.pages],
			"total_pages": self.total_pages,
			"total_panels": self.total_panels,
			"dialogue_word_count": self.dialogue_word_count,
			"estimated_art_time_hours": self.estimated_art_time_hours,
		}


@dataclass
class ValidationResult:
	"""validate_script 的结果：errors 决定 valid，warnings 只是提示。"""
	errors: List[str] = field(default_factory=list)
	warnings: List[str] = field(default_factory=list)

	@property
	def valid(self) -> bool:
		return not self.errors

	def to_dict(self) -> Dict[str, Any]:
		return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}
