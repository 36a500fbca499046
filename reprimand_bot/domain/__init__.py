"""Domain layer for Reprimand Bot.

Pure value objects, error types and eligibility rules. Nothing in this
package performs I/O.
"""
