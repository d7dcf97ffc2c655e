"""Operations built on hermes_update_core."""
