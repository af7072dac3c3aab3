# -*- coding: utf-8 -*-
"""compose_panel skill：单格构图（远程 + 确定性回退）。"""

from .schema import CompositionResult
from .skill import ComposeConfig, CompositionSynthesizer

__all__ = ["CompositionResult", "ComposeConfig", "CompositionSynthesizer"]
