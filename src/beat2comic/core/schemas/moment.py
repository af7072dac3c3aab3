# -*- coding: utf-8 -*-
"""
beat2comic/core/schemas/moment.py

Beat / Moment：生成流水线的输入契约。
- Beat：一段叙事散文 + 元数据。
- Moment：beat 里的一个视觉瞬间（一格画的候选）。

注意：
- 调用方直接给出的 moments 是权威输入，流水线不会重新推导。
- importance 必须在 [0, 1]，越界直接报错（调用方错误，不做静默修正）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Moment:
	description: str
	characters: List[str] = field(default_factory=list)
	action: str = "standing"
	emotion: str = "neutral"
	importance: float = 0.5
	dialogue: Optional[List[str]] = None
	narration: Optional[str] = None

	def __post_init__(self) -> None:
		if not 0.0 <= self.importance <= 1.0:
			raise ValueError(f"importance must be within [0, 1]: {self.importance}")

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"description": self.description,
			"characters": list(self.characters),
			"action": self.action,
			"emotion": self.emotion,
			"importance": self.importance,
		}
		if self.dialogue is not None:
			d["dialogue"] = list(self.dialogue)
		if self.narration is not None:
			d["narration"] = self.narration
		return d

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Moment":
		dialogue = data.get("dialogue")
		importance = data.get("importance")
		return cls(
			description=data.get("description", ""),
			characters=list(data.get("characters") or []),
			action=data.get("action") or "standing",
			emotion=data.get("emotion") or "neutral",
			importance=float(importance) if importance is not None else 0.5,
			dialogue=list(dialogue) if dialogue is not None else None,
			narration=data.get("narration"),
		)


@dataclass
class Beat:
	"""
	一个叙事节拍。

	moments：
	- 非空时原样使用（跳过所有启发式）
	- 为空时从 description 切句推导
	"""
	description: str
	beat_number: int = 1
	moments: List[Moment] = field(default_factory=list)
	tone: str = ""
	pacing: str = "medium"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"beat_number": self.beat_number,
			"description": self.description,
			"moments": [m.to_dict() for m in self.moments],
			"tone": self.tone,
			"pacing": self.pacing,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Beat":
		if not isinstance(data, dict):
			raise ValueError("beat must be a JSON object")
		if "description" not in data and not data.get("moments"):
			raise ValueError("beat needs a description or a non-empty moments list")

		return cls(
			description=data.get("description", ""),
			beat_number=int(data.get("beat_number", 1)),
			moments=[Moment.from_dict(m) for m in data.get("moments") or []],
			tone=data.get("tone", ""),
			pacing=data.get("pacing", "medium"),
		)
