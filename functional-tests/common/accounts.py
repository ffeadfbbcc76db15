"""
Bitcoin addresses outside the node's wallet.

Funds sent to these addresses can only be observed through the UTXO set,
which makes them a clean target for fund/send checks.
"""

from bitcoinlib.keys import HDKey

NETWORK = "regtest"


def new_external_address() -> str:
    """Fresh bech32 (bcrt1...) address from a random key."""
    key = HDKey(network=NETWORK, witness_type="segwit")
    return key.address()


def utxo_balance(cli, address: str) -> float:
    """Confirmed amount held by `address`, via `scantxoutset`."""
    result = cli.call_json("scantxoutset", "start", f'["addr({address})"]')
    return float(result["total_amount"])
