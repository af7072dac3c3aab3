# -*- coding: utf-8 -*-
"""
core/lexicon.py

这个文件做什么：
- 纯规则的文本打标：人物 / 动作 / 情绪 / 重要度 / 台词 / 音效 / 地点 / 语气。
- 全部是词表 + 正则，不做真正的语义理解。

注意：
- 词表的顺序就是优先级（先匹配先赢），不要随便调整顺序。
- 这里只做“识别”，不构造任何 panel 结构；组装在 core/assembler.py。
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple


# 粗糙的专有名词识别：首字母大写的单词
_PROPER_NOUN_RE = re.compile(r"\b[A-Z][a-z]+\b")

_ACTION_RE = re.compile(r"\b(?:run|walk|fight|speak|look|grab|throw|jump)\w*\b", flags=re.IGNORECASE)

# 有序：happy > sad > angry > scared > surprised
EMOTION_PATTERNS: List[Tuple[str, re.Pattern]] = [
	("happy", re.compile(r"\b(?:smile|laugh|joy|happy|glad)\b", flags=re.IGNORECASE)),
	("sad", re.compile(r"\b(?:cry|tear|sad|sorrow|grief)\b", flags=re.IGNORECASE)),
	("angry", re.compile(r"\b(?:angry|rage|furious|mad|hate)\b", flags=re.IGNORECASE)),
	("scared", re.compile(r"\b(?:fear|afraid|terror|scared|panic)\b", flags=re.IGNORECASE)),
	("surprised", re.compile(r"\b(?:surprise|shock|amaze|astonish)\b", flags=re.IGNORECASE)),
]

_INTENSITY_VERB_RE = re.compile(r"\b(?:explode|crash|reveal|discover|realize)\b", flags=re.IGNORECASE)
_INTENSE_EMOTION_RE = re.compile(r"\b(?:love|hate|fear|joy|terror)\b", flags=re.IGNORECASE)

BASE_IMPORTANCE = 0.5
LONG_SENTENCE_CHARS = 100

_QUOTED_RE = re.compile(r'"([^"]+)"')

# 有序：每个 pattern 最多贡献一个音效
SFX_PATTERNS: List[Tuple[re.Pattern, str]] = [
	(re.compile(r"\b(bang|boom|crash|smash|pow|zap|thud)\b"), "bold"),
	(re.compile(r"\b(whoosh|swish|swoosh)\b"), "curved"),
	(re.compile(r"\b(crack|snap|pop)\b"), "jagged"),
	(re.compile(r"\b(whisper|hush|shh)\b"), "whisper"),
]

LOCATIONS = ["office", "street", "home", "car", "restaurant", "park", "building", "room"]
DEFAULT_LOCATION = "interior"

_THOUGHT_RE = re.compile(r"\b(?:think|thought|wonder|imagine)", flags=re.IGNORECASE)
_WHISPER_RE = re.compile(r"\b(?:whisper|quietly|softly)", flags=re.IGNORECASE)
_SHOUT_RE = re.compile(r"\b(?:shout|yell|scream|roar)", flags=re.IGNORECASE)

EXPRESSIONS = {
	"happy": "smiling",
	"sad": "frowning",
	"angry": "scowling",
	"surprised": "eyes wide",
	"scared": "fearful",
	"neutral": "neutral",
}

# 有序：run/chase > fight/punch > sit > fall > jump
POSES: List[Tuple[Tuple[str, ...], str]] = [
	(("run", "chase"), "running"),
	(("fight", "punch"), "fighting stance"),
	(("sit",), "sitting"),
	(("fall",), "falling"),
	(("jump",), "jumping"),
]


def extract_characters(text: str) -> List[str]:
	"""首字母大写的词去重（保持首次出现顺序）。"""
	seen = set()
	out = []
	for name in _PROPER_NOUN_RE.findall(text):
		if name not in seen:
			seen.add(name)
			out.append(name)
	return out


def extract_action(text: str) -> str:
	words = [m.group(0) for m in _ACTION_RE.finditer(text)]
	return ", ".join(words) if words else "standing"


def infer_emotion(text: str) -> str:
	for emotion, pattern in EMOTION_PATTERNS:
		if pattern.search(text):
			return emotion
	return "neutral"


def calculate_importance(text: str) -> float:
	importance = BASE_IMPORTANCE

	if _INTENSITY_VERB_RE.search(text):
		importance += 0.3

	if _INTENSE_EMOTION_RE.search(text):
		importance += 0.2

	if len(text) > LONG_SENTENCE_CHARS:
		importance += 0.1

	# 0.5+0.3+0.2 在浮点下会略偏，统一 round 一下再封顶
	return min(1.0, round(importance, 4))


def extract_dialogue(text: str) -> Optional[List[str]]:
	quoted = _QUOTED_RE.findall(text)
	return quoted or None


def match_sfx(text: str) -> List[Tuple[str, str]]:
	"""
	返回 [(token, style), ...]。
	- 文本先转小写再匹配
	- token 是命中的词本身（大写化交给 SoundEffect）
	"""
	low = text.lower()
	hits = []
	for pattern, style in SFX_PATTERNS:
		m = pattern.search(low)
		if m:
			hits.append((m.group(1), style))
	return hits


def infer_location(text: str) -> str:
	low = text.lower()
	for location in LOCATIONS:
		if re.search(rf"\b{location}\b", low):
			return location
	return DEFAULT_LOCATION


def is_thought(text: str) -> bool:
	return _THOUGHT_RE.search(text) is not None


def is_whisper(text: str) -> bool:
	return _WHISPER_RE.search(text) is not None


def is_shout(text: str) -> bool:
	return _SHOUT_RE.search(text) is not None or "!" in text


def expression_for(emotion: str) -> str:
	return EXPRESSIONS.get(emotion.lower(), "neutral")


def pose_for(action: str) -> str:
	low = action.lower()
	for keywords, pose in POSES:
		if any(k in low for k in keywords):
			return pose
	return "standing"
