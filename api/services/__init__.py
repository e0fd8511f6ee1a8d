"""Service layer for the certificate renderer API."""
