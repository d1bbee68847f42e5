"""HTTP and GraphQL surface of the book catalog."""
