"""
Task Spammer - Wallet Module

Key management and transaction signing.
"""

from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .errors import SigningError


class Wallet:
    """
    EVM wallet holding the signing key for every submitted task.

    Example:
        >>> wallet = Wallet.from_private_key(settings.credentials.secret)
        >>> print(f"Address: {wallet.address}")
        >>> raw = wallet.sign_transaction(tx)
    """

    def __init__(self, account: LocalAccount):
        """
        Initialize wallet from a local account.

        Args:
            account: eth-account local account
        """
        self._account = account
        self.address = account.address

    @classmethod
    def from_private_key(cls, private_key_hex: str) -> 'Wallet':
        """
        Create wallet from private key hex string.

        Args:
            private_key_hex: Private key as hex string, with or without 0x

        Returns:
            Wallet instance

        Raises:
            SigningError: If the key is not a valid secp256k1 private key
        """
        try:
            account = Account.from_key(private_key_hex)
        except Exception as e:
            # The key itself must not end up in logs.
            raise SigningError(f"invalid private key: {type(e).__name__}") from None
        return cls(account)

    def sign_transaction(self, tx: Dict[str, Any]) -> bytes:
        """
        Sign a transaction.

        Args:
            tx: Transaction fields as built by web3

        Returns:
            Raw signed transaction bytes, ready for eth_sendRawTransaction
        """
        try:
            signed = self._account.sign_transaction(tx)
        except Exception as e:
            raise SigningError(f"failed to sign transaction: {e}") from e
        return signed.raw_transaction

    def __repr__(self) -> str:
        return f"Wallet(address={self.address!r})"
