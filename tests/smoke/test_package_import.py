from __future__ import annotations

import claude_foundry
from claude_foundry import AzureClaudeClient, ChatClient


def test_public_surface_is_importable() -> None:
    assert claude_foundry.__version__ == "0.1.0"
    assert issubclass(AzureClaudeClient, ChatClient)
    for name in claude_foundry.__all__:
        assert hasattr(claude_foundry, name), name
