"""Pure domain types: templates, formatting rules, causes and library errors."""
