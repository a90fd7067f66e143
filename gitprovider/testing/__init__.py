"""gitprovider testing utilities.

Provides an in-memory fake provider, SSH key generation and pytest fixtures
for testing applications that use gitprovider.
"""

from gitprovider.testing.fake import WRITE_METHODS, FakeCall, FakeClient
from gitprovider.testing.keys import SSHKeyPair, generate_ssh_key_pair

__all__ = [
    # Fake client
    "FakeClient",
    "FakeCall",
    "WRITE_METHODS",
    # Keys
    "SSHKeyPair",
    "generate_ssh_key_pair",
]
