# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Work Time Tracker.
The text export format is fixed and deliberately not translated.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Work Time Tracker",

        # Main window
        "main.title": "Work Time Tracker",
        "main.description_placeholder": "Task description...",
        "main.add_task": "Add Task",
        "main.reset_all": "Reset All",
        "main.export": "Export",
        "main.save": "Save",
        "main.load": "Load",
        "main.start": "Start",
        "main.stop": "Stop",
        "main.delete": "Delete",
        "main.add_minutes": "+{minutes}m",
        "main.subtract_minutes": "-{minutes}m",
        "main.total": "Total Time: {time}",
        "main.unsaved": "Unsaved changes",
        "main.confirm": "Yes",
        "main.cancel": "No",

        # Notifications
        "notify.task_added": "Task added.",
        "notify.task_deleted": "Task deleted.",
        "notify.timers_reset": "All timers reset.",
        "notify.exported": "Saved data to {file}",
        "notify.state_saved": "State saved.",
        "notify.state_loaded": "Loaded {count} task(s).",
        "notify.no_saved_data": "No saved data found.",
        "notify.save_failed": "Save failed: {error}",
        "notify.load_failed": "Load failed: {error}",
        "notify.export_failed": "Export failed: {error}",

        # Confirmations
        "confirm.delete": "Delete? {name}",
        "confirm.reset_all": "Confirm reset all timers?",

        # Errors
        "error.init_title": "Initialization Error",
        "error.init_message": "Failed to initialize application:\n{error}",
    },
    "de": {
        # Application
        "app.name": "Arbeitszeit-Tracker",

        # Main window
        "main.title": "Arbeitszeit-Tracker",
        "main.description_placeholder": "Aufgabenbeschreibung...",
        "main.add_task": "Aufgabe hinzufügen",
        "main.reset_all": "Alle zurücksetzen",
        "main.export": "Exportieren",
        "main.save": "Speichern",
        "main.load": "Laden",
        "main.start": "Start",
        "main.stop": "Stopp",
        "main.delete": "Löschen",
        "main.add_minutes": "+{minutes}m",
        "main.subtract_minutes": "-{minutes}m",
        "main.total": "Gesamtzeit: {time}",
        "main.unsaved": "Ungespeicherte Änderungen",
        "main.confirm": "Ja",
        "main.cancel": "Nein",

        # Notifications
        "notify.task_added": "Aufgabe hinzugefügt.",
        "notify.task_deleted": "Aufgabe gelöscht.",
        "notify.timers_reset": "Alle Timer zurückgesetzt.",
        "notify.exported": "Daten gespeichert in {file}",
        "notify.state_saved": "Zustand gespeichert.",
        "notify.state_loaded": "{count} Aufgabe(n) geladen.",
        "notify.no_saved_data": "Keine gespeicherten Daten gefunden.",
        "notify.save_failed": "Speichern fehlgeschlagen: {error}",
        "notify.load_failed": "Laden fehlgeschlagen: {error}",
        "notify.export_failed": "Export fehlgeschlagen: {error}",

        # Confirmations
        "confirm.delete": "Löschen? {name}",
        "confirm.reset_all": "Alle Timer wirklich zurücksetzen?",

        # Errors
        "error.init_title": "Initialisierungsfehler",
        "error.init_message": "Anwendung konnte nicht gestartet werden:\n{error}",
    },
}
