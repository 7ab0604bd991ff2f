"""
Element ID generation.

Elementor ids are 7 lowercase hex characters drawn from 4 random bytes.
Uniqueness is probabilistic only.
"""

import secrets

ELEMENT_ID_LENGTH = 7


def generate_element_id() -> str:
    return secrets.token_bytes(4).hex()[:ELEMENT_ID_LENGTH]
