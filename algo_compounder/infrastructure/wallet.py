"""Account signing for the zero-value payments that collect rewards"""

import base64

from algosdk import account, encoding, error, mnemonic, transaction

from algo_compounder.config import settings
from algo_compounder.domain.exceptions import InvalidMnemonicError
from algo_compounder.domain.models import SignedPayment, TransactionParams


class AccountSigner:
    """Signs payments from an account to itself"""

    def __init__(
        self,
        private_key: str,
        fee_microalgos: int | None = None,
        validity_rounds: int | None = None,
    ):
        self.private_key = private_key
        self.address = account.address_from_private_key(private_key)
        self.fee_microalgos = fee_microalgos or settings.transaction_fee_microalgos
        self.validity_rounds = validity_rounds or settings.transaction_validity_rounds

    @classmethod
    def from_mnemonic(cls, words: str, **kwargs) -> "AccountSigner":
        """
        Recover the account from its 25 word mnemonic.

        Raises:
            InvalidMnemonicError: If the words are not a valid mnemonic
        """
        try:
            private_key = mnemonic.to_private_key(words.strip())
        except (error.WrongMnemonicLengthError, error.WrongChecksumError, ValueError, KeyError) as e:
            raise InvalidMnemonicError(f"Invalid account mnemonic: {e}") from e
        return cls(private_key, **kwargs)

    def build_self_payment(self, params: TransactionParams, note: str) -> transaction.PaymentTxn:
        """Zero amount payment back to this account with a flat fee"""
        suggested = transaction.SuggestedParams(
            fee=self.fee_microalgos,
            first=params.last_round,
            last=params.last_round + self.validity_rounds,
            gh=params.genesis_hash,
            gen=params.genesis_id,
            flat_fee=True,
        )
        return transaction.PaymentTxn(
            sender=self.address,
            sp=suggested,
            receiver=self.address,
            amt=0,
            note=note.encode(),
        )

    def sign(self, txn: transaction.Transaction) -> SignedPayment:
        signed = txn.sign(self.private_key)
        raw = base64.b64decode(encoding.msgpack_encode(signed))
        return SignedPayment(tx_id=signed.get_txid(), raw=raw)

    def sign_self_payment(self, params: TransactionParams, note: str) -> SignedPayment:
        return self.sign(self.build_self_payment(params, note))
