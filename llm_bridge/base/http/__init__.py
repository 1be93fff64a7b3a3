"""HTTP utilities package.

Exposes the pooled ``httpx.AsyncClient`` factory and response helpers.
"""

from .client import create_async_client, decode_json, expect_object, merge_headers, read_error_body

__all__ = ["create_async_client", "decode_json", "expect_object", "merge_headers", "read_error_body"]
