"""Constants for Device model field names"""


class DeviceFields:
    """Field name constants for Device model"""
    DEVICE_ID = "device_id"
    DEVICE_TYPE = "device_type"
    IP_ADDRESS = "ip_address"
    PORT = "port"
    RELOAD_PORT = "reload_port"

    # Extension block fields
    INTERVAL = "interval"
    METRICS = "metrics"
    JETSON = "jetson"
    INA260 = "ina260"
    SHELLY = "shelly"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

    # Fields editable without replacing the whole config
    IDENTITY_FIELDS = (DEVICE_TYPE, IP_ADDRESS, PORT, RELOAD_PORT)
    REQUIRED_FIELDS = (DEVICE_ID, DEVICE_TYPE, IP_ADDRESS, PORT, RELOAD_PORT)
