# -*- coding: utf-8 -*-
"""
core/assembler.py

这个文件做什么：
- Moment + 构图结果 -> 完整的 ComicPanel。
- 这是纯函数集合：不读写文件、不调用远程服务。

组成：
- determine_size：importance 分档（>=0.9 full-page, >=0.7 large, >=0.4 medium, 其余 small）
- place_characters：x 均分 (i+1)/(n+1)，y=0.5，朝向按下标奇偶左右交替
- build_dialogue：台词轮流分配给人物，没有人物时记为 "Unknown"
- identify_sfx：按 lexicon.SFX_PATTERNS 顺序扫描描述
- describe_panel：远程构图成功时加上镜头前缀，回退时直接用原描述

注意：
- 人物/台词/音效只依赖 Moment，不依赖远程调用是否成功。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from beat2comic.core import lexicon
from beat2comic.core.schemas import (
	ComicCharacter,
	ComicPanel,
	Dialogue,
	Moment,
	PanelComposition,
	Point,
	SoundEffect,
)

if TYPE_CHECKING:
	from beat2comic.skills.compose_panel.schema import CompositionResult


SIZE_TIERS = [
	(0.9, "full-page"),
	(0.7, "large"),
	(0.4, "medium"),
]


def humanize(value: str) -> str:
	"""'medium-shot' -> 'Medium Shot'"""
	return " ".join(w[:1].upper() + w[1:] for w in value.split("-"))


def determine_size(importance: float) -> str:
	for threshold, size in SIZE_TIERS:
		if importance >= threshold:
			return size
	return "small"


def character_position(index: int, total: int) -> Point:
	spacing = 1 / (total + 1)
	return Point(x=spacing * (index + 1), y=0.5)


def place_characters(moment: Moment) -> List[ComicCharacter]:
	total = len(moment.characters)
	return [
		ComicCharacter(
			name=name,
			expression=lexicon.expression_for(moment.emotion),
			pose=lexicon.pose_for(moment.action),
			position=character_position(i, total),
			# 对话场面：相邻人物面对面
			facing="right" if i % 2 == 0 else "left",
		)
		for i, name in enumerate(moment.characters)
	]


def build_dialogue(moment: Moment) -> List[Dialogue]:
	if not moment.dialogue:
		return []

	speakers = moment.characters
	return [
		Dialogue(
			character=speakers[i % len(speakers)] if speakers else "Unknown",
			text=text,
			thought=lexicon.is_thought(text),
			whisper=lexicon.is_whisper(text),
			shout=lexicon.is_shout(text),
			narration=False,
			off_panel=False,
		)
		for i, text in enumerate(moment.dialogue)
	]


def identify_sfx(moment: Moment) -> List[SoundEffect]:
	return [
		SoundEffect(text=token, style=style, position=Point(0.5, 0.3), size=1.0)
		for token, style in lexicon.match_sfx(moment.description)
	]


def describe_panel(moment: Moment, composition: PanelComposition) -> str:
	parts = [f"{humanize(composition.shot_type)} of"]
	if moment.characters:
		parts.append(" and ".join(moment.characters))
	parts.append(moment.description)
	return " ".join(parts)


def assemble_panel(moment: Moment, composed: "CompositionResult", panel_number: int) -> ComicPanel:
	"""
	把 CompositionSynthesizer 的结果装配成 ComicPanel。

	composed.used_fallback 为真时描述退化为 moment 原文。
	"""
	if composed.used_fallback:
		description = moment.description
	else:
		description = describe_panel(moment, composed.composition)

	return ComicPanel(
		number=panel_number,
		size=determine_size(moment.importance),
		description=description,
		art_direction=composed.art_direction,
		composition=composed.composition,
		characters=composed.characters,
		location=lexicon.infer_location(moment.description),
		time=None,
		captions=[moment.narration] if moment.narration else [],
		dialogue=composed.dialogue,
		sfx=composed.sfx,
	)
