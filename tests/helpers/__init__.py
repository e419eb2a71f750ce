from .factories import (
    mk_private_key,
    public_key_hex,
    mk_address,
    mk_identity,
    mk_vote,
    mk_transfer,
    mk_vote_tx,
    mk_delegate_registration,
)
from .devices import SoftwareDevice, ScriptedDevice, BlockingDevice

__all__ = [
    "mk_private_key",
    "public_key_hex",
    "mk_address",
    "mk_identity",
    "mk_vote",
    "mk_transfer",
    "mk_vote_tx",
    "mk_delegate_registration",
    "SoftwareDevice",
    "ScriptedDevice",
    "BlockingDevice",
]
