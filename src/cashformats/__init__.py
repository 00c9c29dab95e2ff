# re-import names that should be visible to the user
from .address import Address, AddressKind, classify_network, parse  # noqa: F401
from .exceptions import *  # noqa: F401,F403
from .network import (  # noqa: F401
    BitcoinCash,
    BitcoinCashRegtest,
    BitcoinCashTestnet,
    Network,
    NetworkKind,
    NetworkRegistry,
)
from .transaction import TxOutput  # noqa: F401
