"""en_us strings for the Xendit gateway."""

NAME = 'Xendit (IDR)'
DESCRIPTION = (
    'Accept credit and debit cards, e-wallets, bank transfers, and send bulk payments '
    'via a single integration in Indonesia.'
)

# Settings
API_KEY_LABEL = 'API Key'
ERROR_API_KEY_VALID = 'The provided API Public Key is not valid.'
ERROR_API_KEY_EMPTY = 'The API Public Key cannot be empty.'

# Process
SUBMIT = 'Pay with Xendit'

UNSUPPORTED = 'The requested operation is not supported by this gateway.'
