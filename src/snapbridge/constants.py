"""Static identifiers: snap origin, mainnet contract addresses and ABIs."""

DEFAULT_SNAP_ORIGIN = "npm:@firnprotocol/snap"

MAINNET_CHAIN_ID = 1

# Uniswap V3 SwapRouter02 (exactInputSingle without deadline)
SWAP_ROUTER_02 = "0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45"
WRAPPED_ETHER = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

# Only the entry point the builder encodes
ROUTER_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"internalType": "address", "name": "tokenIn", "type": "address"},
                    {"internalType": "address", "name": "tokenOut", "type": "address"},
                    {"internalType": "uint24", "name": "fee", "type": "uint24"},
                    {"internalType": "address", "name": "recipient", "type": "address"},
                    {"internalType": "uint256", "name": "amountIn", "type": "uint256"},
                    {"internalType": "uint256", "name": "amountOutMinimum", "type": "uint256"},
                    {"internalType": "uint160", "name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
                "internalType": "struct IV3SwapRouter.ExactInputSingleParams",
                "name": "params",
                "type": "tuple",
            }
        ],
        "name": "exactInputSingle",
        "outputs": [{"internalType": "uint256", "name": "amountOut", "type": "uint256"}],
        "stateMutability": "payable",
        "type": "function",
    }
]

# Wallet RPC methods
METHOD_CLIENT_VERSION = "web3_clientVersion"
METHOD_GET_SNAPS = "wallet_getSnaps"
METHOD_ENABLE = "wallet_enable"
METHOD_INVOKE_SNAP = "wallet_invokeSnap"
METHOD_ACCOUNTS = "eth_accounts"
METHOD_CHAIN_ID = "eth_chainId"

# Snap methods
SNAP_INITIALIZE = "initialize"
SNAP_REQUEST_BALANCE = "requestBalance"
SNAP_TRANSACT = "transact"

# EIP-1193 provider error codes
USER_REJECTED_CODE = 4001
UNAUTHORIZED_CODE = 4100
DISCONNECTED_CODE = 4900
