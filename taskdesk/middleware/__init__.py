"""Request-boundary concerns: authentication, CORS, error mapping."""
