# -*- coding: utf-8 -*-
"""
beat2comic/core/schemas/panel.py

分镜（panel）与页面（page）的数据结构：生成流水线与排版/校验阶段的共享契约。

包含：
- PanelComposition / Lighting / Point：镜头构图元数据
- ComicCharacter / Dialogue / SoundEffect：画格内元素
- ComicPanel / ComicPage / GeneratedPanels：生成结果

约定：
- 封闭词表（shot type / angle / ...）集中定义在本文件。
- shot_type / angle 不在词表内时归一化为默认值（medium-shot / eye-level），从不报错。
- to_dict() 输出的字段名与 JSON 导出一致（camelCase 的地方保持 camelCase）；
  from_dict() 同时接受 snake_case 与 camelCase。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


SHOT_TYPES = (
	"extreme-close-up",
	"close-up",
	"medium-shot",
	"full-shot",
	"long-shot",
	"establishing-shot",
	"over-shoulder",
	"point-of-view",
	"bird-eye",
	"worm-eye",
)

CAMERA_ANGLES = (
	"eye-level",
	"high-angle",
	"low-angle",
	"dutch-angle",
	"overhead",
	"ground-level",
)

PERSPECTIVES = ("one-point", "two-point", "three-point", "isometric")
LIGHTING_TYPES = ("natural", "dramatic", "noir", "bright", "silhouette")
FACINGS = ("left", "right", "forward", "back", "three-quarter")
SFX_STYLES = ("bold", "jagged", "curved", "explosive", "whisper")
PANEL_SIZES = ("small", "medium", "large", "full-page", "double-page-spread")
COMIC_STYLES = ("traditional", "manga", "european", "indie", "web_comic")

DEFAULT_SHOT_TYPE = "medium-shot"
DEFAULT_ANGLE = "eye-level"
DEFAULT_PERSPECTIVE = "two-point"


def _slug(value: Any) -> str:
	return re.sub(r"\s+", "-", str(value).strip().lower())


def normalize_shot_type(value: Any) -> str:
	s = _slug(value)
	return s if s in SHOT_TYPES else DEFAULT_SHOT_TYPE


def normalize_camera_angle(value: Any) -> str:
	s = _slug(value)
	return s if s in CAMERA_ANGLES else DEFAULT_ANGLE


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
	"""按顺序取第一个存在且非 None 的键（兼容 snake_case / camelCase）。"""
	for k in keys:
		if data.get(k) is not None:
			return data[k]
	return default


@dataclass
class Point:
	"""画面内相对坐标，0-1（左->右，上->下）。"""
	x: float = 0.5
	y: float = 0.5

	def to_dict(self) -> Dict[str, float]:
		return {"x": self.x, "y": self.y}

	@classmethod
	def from_dict(cls, data: Optional[Dict[str, Any]], default: Optional["Point"] = None) -> "Point":
		base = default or cls()
		if not isinstance(data, dict):
			return cls(base.x, base.y)
		return cls(x=float(data.get("x", base.x)), y=float(data.get("y", base.y)))


@dataclass
class Lighting:
	type: str = "natural"
	direction: float = 45.0
	intensity: float = 0.7

	def to_dict(self) -> Dict[str, Any]:
		return {"type": self.type, "direction": self.direction, "intensity": self.intensity}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Lighting":
		return cls(
			type=data.get("type", "natural"),
			direction=float(data.get("direction", 45.0)),
			intensity=float(data.get("intensity", 0.7)),
		)


@dataclass
class PanelComposition:
	shot_type: str = DEFAULT_SHOT_TYPE
	angle: str = DEFAULT_ANGLE
	perspective: str = DEFAULT_PERSPECTIVE
	focal_point: Point = field(default_factory=Point)
	lighting: Optional[Lighting] = None

	def __post_init__(self) -> None:
		self.shot_type = normalize_shot_type(self.shot_type)
		self.angle = normalize_camera_angle(self.angle)

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"shotType": self.shot_type,
			"angle": self.angle,
			"perspective": self.perspective,
			"focalPoint": self.focal_point.to_dict(),
		}
		if self.lighting is not None:
			d["lighting"] = self.lighting.to_dict()
		return d

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "PanelComposition":
		lighting = data.get("lighting")
		return cls(
			shot_type=_pick(data, "shot_type", "shotType", default=DEFAULT_SHOT_TYPE),
			angle=_pick(data, "angle", default=DEFAULT_ANGLE),
			perspective=_pick(data, "perspective", default=DEFAULT_PERSPECTIVE),
			focal_point=Point.from_dict(_pick(data, "focal_point", "focalPoint")),
			lighting=Lighting.from_dict(lighting) if isinstance(lighting, dict) else None,
		)


@dataclass
class ComicCharacter:
	name: str
	expression: str = "neutral"
	pose: str = "standing"
	position: Point = field(default_factory=Point)
	facing: str = "forward"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"name": self.name,
			"expression": self.expression,
			"pose": self.pose,
			"position": self.position.to_dict(),
			"facing": self.facing,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ComicCharacter":
		return cls(
			name=data["name"],
			expression=data.get("expression", "neutral"),
			pose=data.get("pose", "standing"),
			position=Point.from_dict(data.get("position")),
			facing=data.get("facing", "forward"),
		)


@dataclass
class Dialogue:
	"""
	一条台词。

	thought/whisper/shout/narration 可以同时为真；
	导出时只显示一个标签，优先级见 label。
	"""
	character: str
	text: str
	thought: bool = False
	whisper: bool = False
	shout: bool = False
	narration: bool = False
	off_panel: bool = False

	@property
	def label(self) -> str:
		if self.thought:
			return "THOUGHT"
		if self.whisper:
			return "WHISPER"
		if self.shout:
			return "SHOUT"
		if self.narration:
			return "NARRATION"
		return "DIALOGUE"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"character": self.character,
			"text": self.text,
			"thought": self.thought,
			"whisper": self.whisper,
			"shout": self.shout,
			"narration": self.narration,
			"offPanel": self.off_panel,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Dialogue":
		return cls(
			character=data.get("character", "Unknown"),
			text=data.get("text", ""),
			thought=bool(data.get("thought", False)),
			whisper=bool(data.get("whisper", False)),
			shout=bool(data.get("shout", False)),
			narration=bool(data.get("narration", False)),
			off_panel=bool(_pick(data, "off_panel", "offPanel", default=False)),
		)


@dataclass
class SoundEffect:
	text: str
	style: str = "bold"
	position: Point = field(default_factory=lambda: Point(0.5, 0.3))
	size: float = 1.0

	def __post_init__(self) -> None:
		self.text = self.text.upper()

	def to_dict(self) -> Dict[str, Any]:
		return {
			"text": self.text,
			"style": self.style,
			"position": self.position.to_dict(),
			"size": self.size,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "SoundEffect":
		return cls(
			text=data["text"],
			style=data.get("style", "bold"),
			position=Point.from_dict(data.get("position"), default=Point(0.5, 0.3)),
			size=float(data.get("size", 1.0)),
		)


@dataclass
class ComicPanel:
	number: int
	size: str
	description: str
	art_direction: str = ""
	composition: PanelComposition = field(default_factory=PanelComposition)
	characters: List[ComicCharacter] = field(default_factory=list)
	location: str = ""
	time: Optional[str] = None
	captions: List[str] = field(default_factory=list)
	dialogue: List[Dialogue] = field(default_factory=list)
	sfx: List[SoundEffect] = field(default_factory=list)
	border_style: Optional[str] = None
	bleed_type: Optional[str] = None
	transition_to: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"number": self.number,
			"size": self.size,
			"description": self.description,
			"artDirection": self.art_direction,
			"composition": self.composition.to_dict(),
			"characters": [c.to_dict() for c in self.characters],
			"location": self.location,
			"captions": list(self.captions),
			"dialogue": [x.to_dict() for x in self.dialogue],
			"sfx": [x.to_dict() for x in self.sfx],
		}
		if self.time is not None:
			d["time"] = self.time
		# 可选的版式元数据：没有就不写
		for key, value in (
			("borderStyle", self.border_style),
			("bleedType", self.bleed_type),
			("transitionTo", self.transition_to),
		):
			if value is not None:
				d[key] = value
		return d

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ComicPanel":
		return cls(
			number=int(data.get("number", 1)),
			size=data.get("size") or "medium",
			description=data.get("description", ""),
			art_direction=_pick(data, "art_direction", "artDirection", default=""),
			composition=PanelComposition.from_dict(data.get("composition") or {}),
			characters=[ComicCharacter.from_dict(c) for c in data.get("characters", [])],
			location=data.get("location", ""),
			time=data.get("time"),
			captions=list(data.get("captions") or []),
			dialogue=[Dialogue.from_dict(x) for x in data.get("dialogue", [])],
			sfx=[SoundEffect.from_dict(x) for x in data.get("sfx") or []],
			border_style=_pick(data, "border_style", "borderStyle"),
			bleed_type=_pick(data, "bleed_type", "bleedType"),
			transition_to=_pick(data, "transition_to", "transitionTo"),
		)


@dataclass
class ComicPage:
	page_number: int
	panels: List[ComicPanel] = field(default_factory=list)
	layout_suggestion: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"pageNumber": self.page_number,
			"panels": [p.to_dict() for p in self.panels],
		}
		if self.layout_suggestion is not None:
			d["layoutSuggestion"] = self.layout_suggestion
		return d

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ComicPage":
		return cls(
			page_number=int(_pick(data, "page_number", "pageNumber", default=1)),
			panels=[ComicPanel.from_dict(p) for p in data.get("panels", [])],
			layout_suggestion=_pick(data, "layout_suggestion", "layoutSuggestion"),
		)


@dataclass
class GeneratedPanels:
	"""生成流水线的输出。"""
	pages: List[ComicPage]
	total_panels: int
	avg_panels_per_page: float
	style: str

	def to_dict(self) -> Dict[str, Any]:
		return {
			"pages": [p.to_dict() for p in self.pages],
			"total_panels": self.total_panels,
			"avg_panels_per_page": self.avg_panels_per_page,
			"style": self.style,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "GeneratedPanels":
		pages = [ComicPage.from_dict(p) for p in data.get("pages", [])]
		total = sum(len(p.panels) for p in pages)
		return cls(
			pages=pages,
			total_panels=int(data.get("total_panels", total)),
			avg_panels_per_page=float(data.get("avg_panels_per_page", total / len(pages) if pages else 0.0)),
			style=data.get("style", "traditional"),
		)
