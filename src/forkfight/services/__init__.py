"""Vote, undo, matchup and ranking services over the ledger store."""
