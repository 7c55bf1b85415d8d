import re

CONTRACT_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
