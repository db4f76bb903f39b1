"""Rule-based VAT recoverability classification engine."""
