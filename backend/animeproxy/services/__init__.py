"""Services — orchestration between routes, core, and the upstream client."""
