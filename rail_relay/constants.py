"""
Names shared by the Relay Classic mutation layer.
"""

CLIENT_MUTATION_ID = "client_mutation_id"
CLIENT_MUTATION_ID_DESCRIPTION = (
    "A unique identifier for the client performing the mutation."
)

INPUT_ARGUMENT = "input"
INPUT_TYPE_SUFFIX = "Input"
PAYLOAD_TYPE_SUFFIX = "Payload"

SETTINGS_NAME = "RAIL_RELAY"

# Passed positionally to every resolver, never as keyword arguments.
RESOLVER_POSITIONAL_ARGUMENTS = ("root", "info")
