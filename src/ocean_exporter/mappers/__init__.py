"""Pure mappers from fetched resources to gauge observations, one module per resource kind."""
