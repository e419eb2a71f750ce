"""
Assembler tests: sender binding and the vote recipient rule.
"""

from datetime import datetime, timezone

import pytest

from persona_tx import CoreConfig, TransactionAssembler, TransactionType, prepare_for_signing, compute_id
from persona_tx.tx import DEFAULT_NORMALIZERS

from helpers import mk_address, mk_delegate_registration, mk_identity, mk_transfer, mk_vote_tx


class TestSenderBinding:

    def test_sets_sender_public_key(self, transfer_tx, identity):
        prepared = prepare_for_signing(transfer_tx, identity)
        assert prepared.sender_public_key == identity.public_key

    def test_returns_new_value(self, transfer_tx, identity):
        before = transfer_tx.to_struct()
        prepared = prepare_for_signing(transfer_tx, identity)

        assert prepared is not transfer_tx
        assert transfer_tx.sender_public_key is None
        assert transfer_tx.to_struct() == before

    def test_prepared_id_is_cleared(self, identity):
        identified = mk_transfer(sender_public_key=mk_identity(b"old").public_key).identified()
        prepared = prepare_for_signing(identified, identity)
        assert prepared.id is None


class TestTimestamp:

    def test_missing_timestamp_uses_configured_epoch(self, identity):
        epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assembler = TransactionAssembler(config=CoreConfig(network_epoch=epoch))

        before = int((datetime.now(timezone.utc) - epoch).total_seconds())
        prepared = assembler.prepare_for_signing(mk_transfer(timestamp=None), identity)
        after = int((datetime.now(timezone.utc) - epoch).total_seconds())

        assert before <= prepared.timestamp <= after

    def test_default_epoch_differs_from_custom_epoch(self, identity):
        custom = TransactionAssembler(config=CoreConfig(network_epoch=datetime(2024, 1, 1, tzinfo=timezone.utc)))
        stock = prepare_for_signing(mk_transfer(timestamp=None), identity)
        assert custom.prepare_for_signing(mk_transfer(timestamp=None), identity).timestamp < stock.timestamp

    def test_existing_timestamp_is_kept(self, transfer_tx, identity):
        assembler = TransactionAssembler(config=CoreConfig(network_epoch=datetime(2024, 1, 1, tzinfo=timezone.utc)))
        assert assembler.prepare_for_signing(transfer_tx, identity).timestamp == transfer_tx.timestamp


class TestVoteRecipient:

    def test_vote_recipient_overwritten_with_signer_address(self, vote_tx, identity, unrelated_address):
        assert vote_tx.recipient_id == unrelated_address

        prepared = prepare_for_signing(vote_tx, identity)

        assert prepared.recipient_id == identity.address
        assert vote_tx.recipient_id == unrelated_address

    def test_vote_without_recipient_gets_signer_address(self, identity):
        prepared = prepare_for_signing(mk_vote_tx(recipient=None), identity)
        assert prepared.recipient_id == identity.address

    @pytest.mark.parametrize("seed", [b"a", b"b", b"c", b"d"])
    def test_any_caller_recipient_is_discarded(self, identity, seed):
        prepared = prepare_for_signing(mk_vote_tx(recipient=mk_address(seed)), identity)
        assert prepared.recipient_id == identity.address

    def test_prepared_vote_is_encodable(self, vote_tx, identity):
        assert len(compute_id(prepare_for_signing(vote_tx, identity))) == 64


class TestOtherTypes:

    def test_transfer_recipient_unchanged(self, transfer_tx, identity):
        prepared = prepare_for_signing(transfer_tx, identity)
        assert prepared.recipient_id == transfer_tx.recipient_id
        assert prepared.recipient_id != identity.address

    def test_delegate_registration_keeps_absent_recipient(self, identity):
        prepared = prepare_for_signing(mk_delegate_registration(), identity)
        assert prepared.recipient_id is None


class TestCustomRules:

    def test_default_rules_hold_only_votes(self):
        assert set(DEFAULT_NORMALIZERS) == {TransactionType.VOTE}

    def test_empty_rule_table_skips_normalization(self, vote_tx, identity, unrelated_address):
        assembler = TransactionAssembler(normalizers={})
        assert assembler.prepare_for_signing(vote_tx, identity).recipient_id == unrelated_address

    def test_custom_rule_runs_only_for_its_type(self, transfer_tx, identity):
        calls = []

        def memo_rule(tx, who):
            calls.append(tx.type)
            return {"vendor_field": "registered by " + who.address[:6]}

        assembler = TransactionAssembler(normalizers={TransactionType.DELEGATE_REGISTRATION: memo_rule})

        assert assembler.prepare_for_signing(transfer_tx, identity).vendor_field is None
        prepared = assembler.prepare_for_signing(mk_delegate_registration(), identity)
        assert prepared.vendor_field.startswith("registered by ")
        assert calls == [TransactionType.DELEGATE_REGISTRATION]
