class UserRole:
    USER = "USER"
    ORGANIZER = "ORGANIZER"


WALLET_ADDRESS_MIN_LENGTH = 10
