APP_NAME = "crypto-asset-registry"
VERSION = "0.1.0"
