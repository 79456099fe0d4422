"""effectivedex: Pokédex data access, type effectiveness and team recommendations."""
