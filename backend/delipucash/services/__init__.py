# Services package init
"""
DelipuCash Backend: Services Layer
====================================

What:  Business rules between routes (HTTP) and the repository (SQL).

Service Inventory:
    - ReactionService:  like/dislike resolver (mutual exclusion, idempotent
                        set/unset, benign unique-conflict handling)
    - ReplyService:     validated reply creation and oldest-first listing
    - AggregateService: response + live counts + caller's reaction flags
    - validators:       shared existence and input checks

Services hold no state between calls; each call builds a ResponseRepository
on the request's session. Module-level singletons (reaction_service, ...)
are what routes import.
"""
