# -*- coding: utf-8 -*-
"""远程编排服务 client。"""

from .mage_agent_client import MageAgentClient, MageAgentConfig, load_mage_agent_client

__all__ = ["MageAgentClient", "MageAgentConfig", "load_mage_agent_client"]
