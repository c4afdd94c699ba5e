"""Lifecycle phase and auction parameter reader.

The reader only observes transitions driven elsewhere:

    DEFAULT -> PROPOSAL      a next collateral set is proposed
    PROPOSAL -> REBALANCE    auction pricing is finalized, bidding opens
    REBALANCE -> DEFAULT     settlement succeeded
    REBALANCE -> DRAWDOWN    settlement failed

For every phase it returns the full fixed-shape record. Fields that are
not yet meaningful are constructed as zero here, explicitly, instead of
trusting whatever the entity still holds from a previous rebalance.
"""

from __future__ import annotations

from viewer.models.state import AuctionState, LifecyclePhase, ProposalState
from viewer.readers.accessors import EntityAccessor


class AuctionStateReader:
    """Phase-aware view of a basket's proposal and auction fields."""

    def __init__(self, accessor: EntityAccessor) -> None:
        self.accessor = accessor

    def read_phase(self, basket: str) -> LifecyclePhase:
        return self.accessor.get_phase(basket)

    def read_proposal_state(
        self, basket: str, phase: LifecyclePhase | None = None
    ) -> ProposalState:
        """Proposal parameters, zero until something is proposed.

        The proposal start time is only meaningful while in PROPOSAL.
        """
        if phase is None:
            phase = self.read_phase(basket)
        if not phase.has_proposal:
            return ProposalState.empty()

        state = self.accessor.get_proposal_state(basket)
        if phase is not LifecyclePhase.PROPOSAL:
            state = state.model_copy(update={"proposal_start_time": 0})
        return state

    def read_auction_state(
        self, basket: str, phase: LifecyclePhase | None = None
    ) -> AuctionState:
        """Bidding parameters, zero until the basket reaches REBALANCE."""
        if phase is None:
            phase = self.read_phase(basket)
        if not phase.has_auction:
            return AuctionState.empty()
        return self.accessor.get_auction_state(basket)

    def read(self, basket: str) -> tuple[LifecyclePhase, ProposalState, AuctionState]:
        """Phase, proposal and auction state read against one phase value."""
        phase = self.read_phase(basket)
        return (
            phase,
            self.read_proposal_state(basket, phase),
            self.read_auction_state(basket, phase),
        )
