"""Chain-family adapters: Cosmos / Tendermint, EVM and SVM."""
