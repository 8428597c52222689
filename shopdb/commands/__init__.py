"""
Command implementations for the shopdb CLI.
Each submodule provides specific command functionality.
"""

from .demo import DemoCommand, run_demo
from .init_db import InitDatabaseCommand
from .utils import PoolStatsCommand, TestConnectionCommand

__all__ = ['DemoCommand', 'InitDatabaseCommand', 'PoolStatsCommand', 'TestConnectionCommand', 'run_demo']
