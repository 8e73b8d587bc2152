"""
Structured record fixtures for canonical hashing tests.

Trade exists in two shapes, a Pydantic model and a dataclass, with the
same fields so both canonicalize identically.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from hashtree.crypto import sha3_256, to_hex


class Trade(BaseModel):
    """A simple transfer record."""
    sender: str
    receiver: str
    amount: int


@dataclass
class TradeRecord:
    """Dataclass twin of Trade."""
    sender: str
    receiver: str
    amount: int


def make_trade(sender: str = "foo", receiver: str = "bar", amount: int = 111) -> Trade:
    return Trade(sender=sender, receiver=receiver, amount=amount)


def make_hashed_party_trade(sender: str, receiver: str, amount: int) -> Trade:
    """Trade whose party names are replaced by their hex digests (fixed width)."""
    return Trade(
        sender=to_hex(sha3_256(sender.encode("utf-8"))),
        receiver=to_hex(sha3_256(receiver.encode("utf-8"))),
        amount=amount,
    )
