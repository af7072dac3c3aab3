# -*- coding: utf-8 -*-
"""beat2comic：叙事节拍 -> 漫画脚本。"""

__version__ = "0.1.0"
