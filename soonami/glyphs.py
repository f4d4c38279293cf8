def surrogatepass(code):
    return code.encode('utf-16', 'surrogatepass').decode('utf-16')

# Layout
icon_spacer           = '  '

# Alerts
md_alert               = surrogatepass('\udb80\udc26')
