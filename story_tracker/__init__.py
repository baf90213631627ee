"""Story Tracker: keeps a structured story-state tracker in sync with model replies.

The tracker is a user-defined tree of sections, subsections and fields.
Model replies echo the tree back in loosely structured form; the
generation package reconciles them against the live tree, and the session
package tracks which snapshot the model was shown across retries and swipes.
"""

__version__ = "0.1.0"
