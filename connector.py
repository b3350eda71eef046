"""Bloomerang Connector
This connector performs a full replace sync of every selected Bloomerang collection. Each table's schema is
inferred from a live sample record, records are fetched in pages of 50 with a bounded retry per page, and each
page is written as soft deletes of its Ids followed by upserts.
See the Technical Reference documentation (https://fivetran.com/docs/connectors/connector-sdk/technical-reference)
and the Best Practices documentation (https://fivetran.com/docs/connectors/connector-sdk/best-practices) for details
"""

# For reading configuration from a JSON file
import json

# Import required classes from fivetran_connector_sdk
from fivetran_connector_sdk import Connector

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

# Import self written modules
from bloomerang import (
    BloomerangClient,
    BloomerangSync,
    FivetranSink,
    parse_configuration,
    validate_configuration,
)


def build_sync(configuration: dict) -> BloomerangSync:
    """
    Create the orchestrator for a configuration, wired to the Fivetran SDK sink.
    Args:
        configuration: a dictionary that holds the configuration settings for the connector.
    """
    config = parse_configuration(configuration)
    client = BloomerangClient(
        private_key=config.private_key,
        base_url=config.base_url,
        timeout=config.request_timeout_seconds,
    )
    return BloomerangSync(client=client, sink=FivetranSink(configuration))


def check_connection(configuration: dict) -> bool:
    """
    Fail-fast credentials and connectivity check. Makes one request without retries.
    Args:
        configuration: a dictionary that holds the configuration settings for the connector.
    Returns:
        True if the Bloomerang API accepted the request, False otherwise.
    """
    validate_configuration(configuration=configuration)
    return build_sync(configuration).test_connection()


def schema(configuration: dict):
    """
    Define the schema function which lets you configure the schema your connector delivers.
    Columns are inferred from one live record of each selected collection. Collections with an Id column
    use it as their primary key; the others fall back to the Fivetran computed _fivetran_id.
    See the technical reference documentation for more details on the schema function:
    https://fivetran.com/docs/connector-sdk/technical-reference/connector-sdk-code/connector-sdk-methods#schema
    Args:
        configuration: a dictionary that holds the configuration settings for the connector.
    """
    validate_configuration(configuration=configuration)
    sync = build_sync(configuration)
    return sync.discover(sync_tables(configuration))


def sync_tables(configuration: dict):
    """Return the configured table selection, or None to sync every collection."""
    return parse_configuration(configuration).tables or None


def update(configuration: dict, state: dict):
    """
    Define the update function, which is a required function, and is called by Fivetran during each sync.
    Every sync re-pulls each selected collection in full; the state is checkpointed after each collection
    but carries no cursor.
    See the technical reference documentation for more details on the update function
    https://fivetran.com/docs/connectors/connector-sdk/technical-reference#update
    Args:
        configuration: A dictionary containing connection details
        state: A dictionary containing state information from previous runs
        The state dictionary is empty for the first sync or for any full re-sync
    """
    log.info("Starting sync for Bloomerang")

    # Validate the configuration to ensure it contains all required values.
    validate_configuration(configuration=configuration)

    try:
        runs = build_sync(configuration).sync(sync_tables(configuration), state)
        total = sum(run.total_records_processed for run in runs)
        log.info(f"Bloomerang sync finished: {len(runs)} table(s), {total} record(s)")

    except Exception as e:
        # In case of an exception, raise a runtime error
        raise RuntimeError(f"Failed to sync data: {str(e)}") from e


# Create the connector object using the schema and update functions
connector = Connector(update=update, schema=schema)

# Check if the script is being run as the main module.
# This is Python's standard entry method allowing your script to be run directly from the command line or IDE 'run' button.
#
# IMPORTANT: The recommended way to test your connector is using the Fivetran debug command:
#   fivetran debug
#
# This local testing block is provided as a convenience for quick debugging during development.
# Note: This method is not called by Fivetran when executing your connector in production.
if __name__ == "__main__":
    # Open the configuration.json file and load its contents
    with open("configuration.json", "r") as f:
        configuration = json.load(f)

    # Check the credentials before the full sync
    if not check_connection(configuration):
        log.severe("Bloomerang connection test failed; check the private_key in configuration.json")

    # Test the connector locally
    connector.debug(configuration=configuration)
