"""medidoc -- medical document text extraction and LLM summarization."""

__version__ = "0.1.0"
