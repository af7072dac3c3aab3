# -*- coding: utf-8 -*-
"""
compose_panel/prompt.py

这个文件做什么：
- 把 Moment + style + panel_number 拼成远程编排请求的 context。
- 这里不发请求，只做请求组装。
"""

from __future__ import annotations

from typing import Any, Dict

from beat2comic.core.schemas import Moment


def build_context(moment: Moment, style: str, panel_number: int) -> Dict[str, Any]:
	return {
		"description": moment.description,
		"characters": list(moment.characters),
		"action": moment.action,
		"emotion": moment.emotion,
		"style": style,
		"panel_number": panel_number,
	}
