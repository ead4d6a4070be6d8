SERVICE_NAME = "inventory-api"
