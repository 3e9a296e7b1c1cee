"""Built-in outcome pattern table for French-language collections calls.

Each outcome maps to case-insensitive regular expressions; any single match
means the outcome is met. Entries are deliberately loose stems so that natural
paraphrase still matches.
"""

DEFAULT_OUTCOME_PATTERNS: dict[str, list[str]] = {
    # Identity verification
    "identification_confirmed": ["confirm", "identit", "date de naissance", "vérifié"],
    "wrong_person_handled": ["merci", "bonne journée", "excus"],
    # Payment negotiation
    "proceed_to_payment": ["paiement", "solde", "montant", "facture"],
    "payment_link_offered": ["lien", "sécurisé", "email", "sms"],
    "email_confirmation": ["email", "envoy", "confirm"],
    "partial_payment_discussed": ["partiel", "moitié", "possible", "arrangement"],
    "options_provided": ["option", "alternative", "possib"],
    "clarification_provided": ["expliqu", "concern", "facture", "compte"],
    "understanding_confirmed": ["d'accord", "compris", "parfait"],
    # Emotional de-escalation
    "empathy_shown": ["comprends", "difficile", "solution", "accompagner"],
    "calm_response": ["comprends", "frustration", "calme"],
    "deescalation": ["solution", "aider", "ensemble"],
    "dispute_acknowledged": ["comprends", "point de vue", "examiner"],
    # Conversation flow and persona
    "polite_closure": ["merci", "bonne journée", "au revoir", "à bientôt"],
    "human_like_response": ["conseill", "je suis", "pas un robot", "humain"],
    "continue_conversation": ["puis-je", "comment", "aider"],
    "french_maintained": ["français", "désolé", "disponible"],
    "polite_redirect": ["puis-je", "aider", "français"],
    # Privacy
    "privacy_addressed": ["coordonnées", "relation commerciale", "légal"],
    "legitimacy_explained": ["cadre", "relation", "commerciale"],
    # Escalation and callback
    "escalation_offered": ["responsable", "rappel", "dossier"],
    "callback_offered": ["rappel", "moment", "convien"],
    "callback_scheduled": ["heure", "rappel", "noté", "confirm"],
}
