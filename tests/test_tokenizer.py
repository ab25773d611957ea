import pytest
from unittest.mock import patch, MagicMock
from aicontext.core.tokenizer import TokenCounter, estimate_tokens


class TestEstimateTokens:
    def test_empty(self):
        assert estimate_tokens("") == 0

    def test_rounds_up(self):
        assert estimate_tokens("a") == 1
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_scales_with_length(self):
        assert estimate_tokens("x" * 400) == 100
        assert estimate_tokens("hello world") > estimate_tokens("hello")

    def test_monotonic(self):
        previous = 0
        for length in range(0, 200):
            current = estimate_tokens("y" * length)
            assert current >= previous
            previous = current


class TestTokenCounter:
    def test_initialization_with_tiktoken(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_encoder = MagicMock()
            mock_tiktoken.get_encoding.return_value = mock_encoder

            counter = TokenCounter()

            assert counter.is_available is True
            assert counter.encoder == mock_encoder
            mock_tiktoken.get_encoding.assert_called_once_with("cl100k_base")

    def test_initialization_with_custom_encoding(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_tiktoken.get_encoding.return_value = MagicMock()

            counter = TokenCounter("gpt2")

            assert counter.encoding_name == "gpt2"
            mock_tiktoken.get_encoding.assert_called_once_with("gpt2")

    def test_unavailable_encoding(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_tiktoken.get_encoding.side_effect = Exception("download failed")

            counter = TokenCounter()

            assert counter.is_available is False
            assert counter.count("hello world") == 0

    def test_count_with_encoder(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_encoder = MagicMock()
            mock_encoder.encode.return_value = [1, 2, 3, 4, 5]
            mock_tiktoken.get_encoding.return_value = mock_encoder

            counter = TokenCounter()

            assert counter.count("test text") == 5
            mock_encoder.encode.assert_called_once_with("test text", disallowed_special=())

    def test_count_empty_string(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_tiktoken.get_encoding.return_value = MagicMock()
            assert TokenCounter().count("") == 0

    def test_encoder_error_handling(self):
        with patch('aicontext.core.tokenizer.tiktoken') as mock_tiktoken:
            mock_encoder = MagicMock()
            mock_encoder.encode.side_effect = Exception("Encoding error")
            mock_tiktoken.get_encoding.return_value = mock_encoder

            counter = TokenCounter()

            assert counter.count("test text") == 0
