# -*- coding: utf-8 -*-
"""
core/moments.py

这个文件做什么：
- Beat -> 有序的 Moment 列表。
- beat 自带非空 moments：原样返回（同一个 list 对象），不跑任何启发式。
- 否则：按 . ! ? 切句，每句一个 Moment，字段由 core/lexicon.py 打标。

切分策略：
- 连续的句末标点视为一个边界（"Wait!?" 不会产生空句）
- 空白句丢弃
"""

from __future__ import annotations

import re
from typing import List

from beat2comic.core import lexicon
from beat2comic.core.schemas import Beat, Moment


_SENT_END_RE = re.compile(r"[.!?]+")


def split_sentences(text: str) -> List[str]:
	return [s.strip() for s in _SENT_END_RE.split(text) if s.strip()]


def moment_from_sentence(sentence: str) -> Moment:
	return Moment(
		description=sentence,
		characters=lexicon.extract_characters(sentence),
		action=lexicon.extract_action(sentence),
		emotion=lexicon.infer_emotion(sentence),
		importance=lexicon.calculate_importance(sentence),
		dialogue=lexicon.extract_dialogue(sentence),
	)


def extract_moments(beat: Beat) -> List[Moment]:
	if beat.moments:
		return beat.moments

	return [moment_from_sentence(s) for s in split_sentences(beat.description)]
