import secrets
import string
import time

from taskpilot.constants.chat import CHAT_ID_PREFIX, CHAT_ID_RANDOM_LENGTH

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_chat_id() -> str:
    """
    Generate the public identifier of a chat, e.g. `chat_1718000000000_k3j9x0a2b`.

    Returns:
        The prefix, the current epoch in milliseconds and a random base36 suffix joined by `_`
    """
    epoch_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(CHAT_ID_RANDOM_LENGTH))
    return f"{CHAT_ID_PREFIX}_{epoch_ms}_{suffix}"
