"""School Evaluation package.

Records point-valued study/discipline events per student (an append-only
ledger) and derives running standings from them. Organized by feature modules
(evaluations, quick_actions, access, roster, client) with a thin Flask
controller layer over service/repository layers.
"""
