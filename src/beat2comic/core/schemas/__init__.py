# -*- coding: utf-8 -*-
"""core 层共享的数据契约。"""

from .moment import Beat, Moment
from .panel import (
	COMIC_STYLES,
	ComicCharacter,
	ComicPage,
	ComicPanel,
	Dialogue,
	GeneratedPanels,
	Lighting,
	PanelComposition,
	Point,
	SoundEffect,
)
from .script import (
	Cover,
	FormattedComicPage,
	FormattedComicScript,
	FormattedPanel,
	ValidationResult,
)

__all__ = [
	"Beat",
	"Moment",
	"COMIC_STYLES",
	"ComicCharacter",
	"ComicPage",
	"ComicPanel",
	"Dialogue",
	"GeneratedPanels",
	"Lighting",
	"PanelComposition",
	"Point",
	"SoundEffect",
	"Cover",
	"FormattedComicPage",
	"FormattedComicScript",
	"FormattedPanel",
	"ValidationResult",
]
