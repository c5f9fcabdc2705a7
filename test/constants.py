# One section "Gold", one row "A" of 5 seats at 500
GOLD_A_CHART = {
    'tiers': [
        {
            'name': 'Stalls',
            'sections': [
                {'name': 'Gold', 'price': 500, 'rows': [{'row_id': 'A', 'seats': 5}]},
            ],
        }
    ]
}

# Aisle row-parts, a spacer and a second section sharing row labels
STALLS_CHART = {
    'tiers': [
        {
            'name': 'Stalls',
            'sections': [
                {
                    'name': 'Gold',
                    'price': 1000,
                    'rows': [
                        {'row_id': 'A-left', 'seats': 3},
                        {'row_id': 'A-right', 'seats': 3, 'offset': 3},
                        {'row_id': 'spacer'},
                        {'row_id': 'B', 'seats': 4},
                    ],
                },
                {
                    'name': 'Silver',
                    'price': 750,
                    'rows': [{'row_id': 'A', 'seats': 2}],
                },
            ],
        },
        {
            'name': 'Rear',
            'sections': [
                {
                    'name': 'Bronze',
                    'price': 500,
                    'rows': [{'row_id': 'R1', 'row_label': 'AA', 'seats': 2}],
                }
            ],
        },
    ]
}

ADMIN_EMAIL = 'admin@example.com'
USER_EMAIL = 'asha@example.com'
DEFAULT_PASSWORD = 'P@ssw0rd'
