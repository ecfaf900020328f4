"""Interface adapters (command-line) for ticketforms."""
