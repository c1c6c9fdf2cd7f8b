"""Transport errors and JSON-RPC message handling."""